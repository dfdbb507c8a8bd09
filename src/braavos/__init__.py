"""
braavos.

Valuation of Binance portfolio-margin (unified) accounts, exported as Prometheus metrics.
"""

__version__ = "0.1.0"

from braavos.api import BinancePortfolioClient, BinancePublicClient

# Configure structlog once at import time (quiet by default).
from braavos.logging import configure_structlog
from braavos.portfolio import AccountPolicy, AccountSummary, compute_account_summary

configure_structlog()

__all__ = [
    "AccountPolicy",
    "AccountSummary",
    "BinancePortfolioClient",
    "BinancePublicClient",
    "__version__",
    "compute_account_summary",
]
