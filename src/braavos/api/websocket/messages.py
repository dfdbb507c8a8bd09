"""WebSocket request/response models."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WsMethod(str, Enum):
    """Request methods understood by the Binance WebSocket endpoints."""

    PING = "ping"
    TIME = "time"
    SUBSCRIBE = "SUBSCRIBE"
    UNSUBSCRIBE = "UNSUBSCRIBE"


def _new_request_id() -> str:
    return uuid.uuid4().hex


class WsRequest(BaseModel):
    """
    Request envelope: `{"id": ..., "method": ..., "params": [...]}`.

    `params` is omitted from the JSON when absent (ping/time take none).
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str = Field(default_factory=_new_request_id)
    method: WsMethod
    params: list[str] | None = None

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)


class WsResponse(BaseModel):
    """Response envelope; `result` is null for SUBSCRIBE acknowledgements."""

    id: str | int | None = None
    status: int | None = None
    result: Any = None
    error: dict[str, Any] | None = None
