# api/schemas/transactions.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from db.utils import MAX_AMOUNT


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: UUID
    transaction_hash: str | None = None
    transaction_type: str
    amount: Decimal
    token: str
    recipient_address: str
    status: str
    note: str
    metadata: dict[str, Any] | None = Field(default=None, validation_alias="meta")
    created_at: datetime
    updated_at: datetime


class TransactionStoreRequest(BaseModel):
    transactionHash: str = Field(..., min_length=1, max_length=128)
    recipientAddress: str = Field(..., min_length=1, max_length=255)
    amount: Decimal = Field(..., gt=0, lt=MAX_AMOUNT)
    walletAddress: str = Field(..., min_length=3, max_length=128)
    token: str | None = Field(default=None, max_length=32)
    transactionType: str | None = Field(default=None, max_length=32)
    status: str | None = Field(default=None, max_length=32)
    note: str | None = None
    network: str | None = None
    explorerUrl: str | None = None


class TransactionUpdateRequest(BaseModel):
    transactionId: int
    status: str = Field(..., min_length=1, max_length=32)
    walletAddress: str = Field(..., min_length=3, max_length=128)
    transactionHash: str | None = Field(default=None, max_length=128)


class TransactionResponse(BaseModel):
    success: bool = True
    data: TransactionRead


class TransactionSyncRequest(BaseModel):
    walletAddress: str = Field(..., min_length=3, max_length=128)


class TransactionSyncResponse(BaseModel):
    success: bool = True
    message: str
