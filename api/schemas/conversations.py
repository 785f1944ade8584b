# api/schemas/conversations.py
from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversationCreateRequest(BaseModel):
    walletAddress: str = Field(..., min_length=3, max_length=128)
    title: str = Field(..., min_length=1, max_length=5000)


class ConversationCreateResponse(BaseModel):
    success: bool = True
    conversationId: int


class AddMessageRequest(BaseModel):
    conversationId: int
    userId: UUID
    message: str = Field(..., min_length=1)
    isUser: bool = False
    metadata: dict[str, Any] | None = None

    @field_validator("isUser", mode="before")
    @classmethod
    def _coerce_is_user(cls, value: Any) -> bool:
        # only literal true / "true" count as a user message
        return value is True or value == "true"


class AddMessageResponse(BaseModel):
    success: bool = True
    messageId: int


class UpdateTitleRequest(BaseModel):
    conversationId: int
    title: str = Field(..., min_length=1, max_length=5000)


class ConversationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: UUID
    title: str
    created_at: datetime
    updated_at: datetime


class ConversationListResponse(BaseModel):
    success: bool = True
    conversations: list[ConversationRead]


class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: UUID
    conversation_id: int | None = None
    message: str
    is_user: bool
    metadata: dict[str, Any] | None = Field(default=None, validation_alias="meta")
    created_at: datetime


class MessageListResponse(BaseModel):
    success: bool = True
    messages: list[MessageRead]
