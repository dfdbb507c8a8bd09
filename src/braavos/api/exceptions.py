"""Custom exceptions for exchange API errors."""

from __future__ import annotations


class BraavosError(Exception):
    """Base exception for braavos errors."""


class BinanceAPIError(BraavosError):
    """HTTP API error with status code and, when present, the Binance error code."""

    def __init__(self, status_code: int, message: str, code: int | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.code = code
        detail = f" (code {code})" if code is not None else ""
        super().__init__(f"API Error {status_code}{detail}: {message}")


class RateLimitError(BinanceAPIError):
    """Request weight exceeded (HTTP 429) or IP banned for ignoring it (HTTP 418)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
        status_code: int = 429,
    ) -> None:
        super().__init__(status_code, message)
        self.retry_after = retry_after


class AuthenticationError(BinanceAPIError):
    """Authentication failed (HTTP 401)."""

    def __init__(self, message: str = "Authentication failed", code: int | None = None) -> None:
        super().__init__(401, message, code)
