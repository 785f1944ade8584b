# api/schemas/wallets.py
from __future__ import annotations

from pydantic import BaseModel, Field


class VerificationMessageResponse(BaseModel):
    walletAddress: str
    message: str


class WalletVerifyRequest(BaseModel):
    walletAddress: str = Field(..., min_length=42, max_length=42)
    message: str = Field(..., min_length=1)
    signature: str = Field(..., min_length=1)
    walletType: str | None = Field(default=None, max_length=32)


class WalletVerifyResponse(BaseModel):
    success: bool = True
    verified: bool


class WalletVerificationStatus(BaseModel):
    walletAddress: str
    verified: bool
