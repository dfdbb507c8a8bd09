"""WebSocket helpers for Binance."""

from braavos.api.websocket.client import BinanceWebSocket
from braavos.api.websocket.messages import WsMethod, WsRequest, WsResponse

__all__ = [
    "BinanceWebSocket",
    "WsMethod",
    "WsRequest",
    "WsResponse",
]
