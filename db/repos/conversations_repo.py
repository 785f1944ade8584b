from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.conversation import Conversation
from db.utils.time import utcnow


class ConversationNotFoundError(Exception):
    pass


def truncate_title(title: str, max_len: int = 50) -> str:
    title = " ".join(title.split())
    if len(title) <= max_len:
        return title
    return title[:max_len].rstrip() + "..."


def create_conversation(db: Session, *, user_id: uuid.UUID, title: str, max_title_len: int = 50) -> Conversation:
    conversation = Conversation(
        user_id=user_id,
        title=truncate_title(title, max_title_len),
    )
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    return conversation


def get_conversation(db: Session, conversation_id: int) -> Conversation | None:
    return db.execute(
        select(Conversation).where(Conversation.id == conversation_id)
    ).scalar_one_or_none()


def touch_conversation(db: Session, *, conversation_id: int) -> Conversation:
    conversation = get_conversation(db, conversation_id)
    if not conversation:
        raise ConversationNotFoundError(f"Conversation not found: {conversation_id}")

    conversation.updated_at = utcnow()
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    return conversation


def rename_conversation(db: Session, *, conversation_id: int, title: str, max_title_len: int = 50) -> Conversation:
    conversation = get_conversation(db, conversation_id)
    if not conversation:
        raise ConversationNotFoundError(f"Conversation not found: {conversation_id}")

    conversation.title = truncate_title(title, max_title_len)
    conversation.updated_at = utcnow()
    db.add(conversation)
    db.commit()
    db.refresh(conversation)
    return conversation


def list_conversations_for_user(db: Session, *, user_id: uuid.UUID) -> list[Conversation]:
    stmt = (
        select(Conversation)
        .where(Conversation.user_id == user_id)
        .order_by(Conversation.updated_at.desc(), Conversation.id.desc())
    )
    return list(db.execute(stmt).scalars().all())
