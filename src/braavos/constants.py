"""Centralized policy constants for account valuation and exchange access.

Named constants for the literals that encode valuation policy, so the dust floor, the quote
asset and the request window are auditable in one place.
"""

from __future__ import annotations

from decimal import Decimal

# =============================================================================
# Valuation
# =============================================================================

# Every balance is valued in this asset; pairs are formed as f"{asset}{QUOTE_ASSET}".
QUOTE_ASSET: str = "USDT"

# Spot holdings worth less than this many USDT (cross_margin_free * price) are treated as dust
# and contribute nothing to account equity. Negative balance and PnL are still counted.
DUST_THRESHOLD_USDT: Decimal = Decimal(5)

# Native token used to pay trading fees at a discount. When an account "burns" it for fees,
# its balance is excluded from equity.
DEFAULT_FEE_DISCOUNT_ASSET: str = "BNB"

# =============================================================================
# Exchange requests
# =============================================================================

# Milliseconds a signed request stays valid after its timestamp.
DEFAULT_RECV_WINDOW_MS: int = 5000

DEFAULT_TIMEOUT_SECONDS: float = 30.0
DEFAULT_MAX_RETRIES: int = 5

# =============================================================================
# Exporter
# =============================================================================

DEFAULT_EXPORTER_HOST: str = "127.0.0.1"
DEFAULT_EXPORTER_PORT: int = 9898
