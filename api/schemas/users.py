# api/schemas/users.py
from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    wallet_address: str
    wallet_type: str
    is_verified: bool
    smart_wallet_address: str | None = None
    created_at: datetime
    updated_at: datetime


class UserEnsureRequest(BaseModel):
    walletAddress: str = Field(..., min_length=3, max_length=128)
    walletType: str | None = Field(default=None, max_length=32)


class UserEnsureResponse(BaseModel):
    message: str
    user: UserRead


class UserStoreRequest(BaseModel):
    walletAddress: str = Field(..., min_length=3, max_length=128)
    walletType: str | None = Field(default=None, max_length=32)
