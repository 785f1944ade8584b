from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.chat_message import ChatMessage


def add_message(
    db: Session,
    *,
    user_id: uuid.UUID,
    message: str,
    is_user: bool,
    conversation_id: int | None = None,
    metadata: dict[str, Any] | None = None,
) -> ChatMessage:
    row = ChatMessage(
        user_id=user_id,
        conversation_id=conversation_id,
        message=message,
        is_user=is_user,
        meta=metadata,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_messages_for_conversation(db: Session, *, conversation_id: int) -> list[ChatMessage]:
    stmt = (
        select(ChatMessage)
        .where(ChatMessage.conversation_id == conversation_id)
        .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
    )
    return list(db.execute(stmt).scalars().all())


def list_messages_for_user(db: Session, *, user_id: uuid.UUID, limit: int = 50) -> list[ChatMessage]:
    stmt = (
        select(ChatMessage)
        .where(ChatMessage.user_id == user_id)
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())
