from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from api.schemas.common import SuccessResponse
from api.schemas.conversations import (
    AddMessageRequest,
    AddMessageResponse,
    ConversationCreateRequest,
    ConversationCreateResponse,
    ConversationListResponse,
    ConversationRead,
    MessageListResponse,
    MessageRead,
    UpdateTitleRequest,
)
from app.config import get_settings
from db.deps import get_db
from db.repos.chat_history_repo import add_message, list_messages_for_conversation
from db.repos.conversations_repo import (
    ConversationNotFoundError,
    create_conversation,
    get_conversation,
    list_conversations_for_user,
    rename_conversation,
    touch_conversation,
)
from db.repos.users_repo import ensure_user, get_user, get_user_by_wallet

router = APIRouter(prefix="/conversations", tags=["conversations"])
logger = logging.getLogger(__name__)


@router.post("/create", response_model=ConversationCreateResponse)
def create_conversation_endpoint(
    payload: ConversationCreateRequest,
    db: Session = Depends(get_db),
) -> ConversationCreateResponse:
    settings = get_settings()
    user, created = ensure_user(
        db,
        wallet_address=payload.walletAddress,
        wallet_type=settings.default_wallet_type,
    )
    if created:
        logger.info("creating new user with wallet address %s", user.wallet_address)

    conversation = create_conversation(
        db,
        user_id=user.id,
        title=payload.title,
        max_title_len=settings.conversation_title_max_len,
    )
    return ConversationCreateResponse(conversationId=conversation.id)


@router.post("/add-message", response_model=AddMessageResponse)
def add_message_endpoint(payload: AddMessageRequest, db: Session = Depends(get_db)) -> AddMessageResponse:
    if get_conversation(db, payload.conversationId) is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    if get_user(db, payload.userId) is None:
        raise HTTPException(status_code=404, detail="User not found")

    row = add_message(
        db,
        user_id=payload.userId,
        conversation_id=payload.conversationId,
        message=payload.message,
        is_user=payload.isUser,
        metadata=payload.metadata,
    )

    try:
        touch_conversation(db, conversation_id=payload.conversationId)
    except Exception as exc:
        # the message is already stored
        logger.warning("error updating conversation timestamp: %s", exc)
        db.rollback()

    return AddMessageResponse(messageId=row.id)


@router.post("/update-title", response_model=SuccessResponse)
def update_title_endpoint(payload: UpdateTitleRequest, db: Session = Depends(get_db)) -> SuccessResponse:
    try:
        rename_conversation(
            db,
            conversation_id=payload.conversationId,
            title=payload.title,
            max_title_len=get_settings().conversation_title_max_len,
        )
    except ConversationNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Conversation not found") from exc
    return SuccessResponse()


@router.get("", response_model=ConversationListResponse)
def list_conversations_endpoint(
    walletAddress: str = Query(default="", max_length=128),
    db: Session = Depends(get_db),
) -> ConversationListResponse:
    if not walletAddress:
        raise HTTPException(status_code=400, detail="Missing wallet address")
    user = get_user_by_wallet(db, walletAddress)
    if user is None:
        return ConversationListResponse(conversations=[])
    conversations = list_conversations_for_user(db, user_id=user.id)
    return ConversationListResponse(
        conversations=[ConversationRead.model_validate(c) for c in conversations]
    )


@router.get("/{conversation_id}/messages", response_model=MessageListResponse)
def list_messages_endpoint(conversation_id: int, db: Session = Depends(get_db)) -> MessageListResponse:
    if get_conversation(db, conversation_id) is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    messages = list_messages_for_conversation(db, conversation_id=conversation_id)
    return MessageListResponse(messages=[MessageRead.model_validate(m) for m in messages])
