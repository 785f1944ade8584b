from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: list[dict[str, Any]] | None = None


class SuccessResponse(BaseModel):
    success: bool = True
