"""WebSocket helper for Binance ping/time/subscribe requests."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import structlog
import websockets

from braavos.api.config import WEBSOCKET_API_URL
from braavos.api.websocket.messages import WsMethod, WsRequest, WsResponse

if TYPE_CHECKING:
    from types import TracebackType

    from websockets.asyncio.client import ClientConnection

logger = structlog.get_logger()


class BinanceWebSocket:
    """
    Minimal request/response WebSocket client.

    Each request carries a unique id; `request()` waits for the reply with the same id and
    skips unrelated frames (stream events, other replies).
    """

    def __init__(self, url: str = WEBSOCKET_API_URL, max_skipped_frames: int = 100) -> None:
        self._url = url
        self._max_skipped = max_skipped_frames
        self._ws: ClientConnection | None = None

    async def __aenter__(self) -> BinanceWebSocket:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def connect(self) -> None:
        """Establish WebSocket connection."""
        logger.info("Connecting to WebSocket", url=self._url)
        self._ws = await websockets.connect(self._url)
        logger.info("WebSocket connected")

    async def close(self) -> None:
        """Close WebSocket connection."""
        if self._ws:
            await self._ws.close()
            self._ws = None
            logger.info("WebSocket closed")

    async def send(self, request: WsRequest) -> ClientConnection:
        """Send a request without waiting for the reply; returns the connection it went out on."""
        ws = self._ws
        if ws is None:
            raise ConnectionError("WebSocket not connected")
        body = request.to_json()
        logger.debug("WebSocket request", body=body)
        await ws.send(body)
        return ws

    async def request(self, request: WsRequest) -> WsResponse:
        """Send a request and return the reply matching its id."""
        ws = await self.send(request)

        for _ in range(self._max_skipped):
            raw = await ws.recv()
            try:
                data: Any = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("Received non-JSON WebSocket message", length=len(raw))
                continue
            if isinstance(data, dict) and str(data.get("id")) == request.id:
                return WsResponse.model_validate(data)

        raise ConnectionError(f"No reply for WebSocket request {request.id}")

    async def ping(self) -> WsResponse:
        """Test connectivity to the WebSocket API."""
        return await self.request(WsRequest(method=WsMethod.PING))

    async def server_time(self) -> int:
        """Server time in ms."""
        response = await self.request(WsRequest(method=WsMethod.TIME))
        result = response.result if isinstance(response.result, dict) else {}
        return int(result.get("serverTime", 0))

    async def subscribe(self, streams: list[str]) -> WsResponse:
        """Subscribe to market streams, e.g. `["btcusdt@aggTrade", "btcusdt@depth"]`."""
        return await self.request(WsRequest(method=WsMethod.SUBSCRIBE, params=streams))
