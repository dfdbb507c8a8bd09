"""Authentication logic for Binance signed endpoints (HMAC-SHA256)."""

from __future__ import annotations

import time
from urllib.parse import urlencode

from cryptography.hazmat.primitives import hashes, hmac

from braavos.constants import DEFAULT_RECV_WINDOW_MS


def unix_time_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


class BinanceAuth:
    """
    Handles Binance API authentication (HMAC-SHA256 query signing).

    Signed (USER_DATA) endpoints need a `timestamp`, an optional `recvWindow`, and a
    `signature` parameter holding the hex HMAC of the full query string keyed by the secret.
    The API key travels in the `X-MBX-APIKEY` header.
    """

    def __init__(
        self,
        api_key: str,
        secret: str,
        recv_window: int = DEFAULT_RECV_WINDOW_MS,
    ) -> None:
        if not api_key or not secret:
            raise ValueError("api_key and secret are required")
        self.api_key = api_key
        self._secret = secret.encode("utf-8")
        self.recv_window = recv_window

    def sign(self, payload: str) -> str:
        """Return the lowercase hex HMAC-SHA256 of `payload`."""
        mac = hmac.HMAC(self._secret, hashes.SHA256())
        mac.update(payload.encode("utf-8"))
        return mac.finalize().hex()

    def signed_query(
        self,
        params: dict[str, str | int] | None = None,
        timestamp: int | None = None,
    ) -> str:
        """
        Build a signed query string.

        Args:
            params: Extra request parameters (signed in insertion order).
            timestamp: Override for the request timestamp in ms (defaults to now).
        """
        query: dict[str, str | int] = dict(params or {})
        query["timestamp"] = timestamp if timestamp is not None else unix_time_ms()
        query["recvWindow"] = self.recv_window
        payload = urlencode(query)
        return f"{payload}&signature={self.sign(payload)}"

    def get_headers(self) -> dict[str, str]:
        """Headers required on signed requests."""
        return {"X-MBX-APIKEY": self.api_key}
