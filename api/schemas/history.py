# api/schemas/history.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from app.chat.contracts import HistoryType


class HistoryRequest(BaseModel):
    walletAddress: str = Field(..., min_length=3, max_length=128)
    type: HistoryType = HistoryType.ALL
    limit: int = Field(default=10, ge=1, le=100)


class HistoryResponse(BaseModel):
    success: bool = True
    data: list[dict[str, Any]]
    formattedResponse: str
