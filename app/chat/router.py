from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from app.chat.contracts import (
    HISTORY_INTENTS,
    TRANSACTION_INTENTS,
    ActionIntent,
    ChatReply,
    ChatRequest,
    ConversationIntent,
    IntentType,
    intent_to_json,
)
from app.chat.llm import generate_conversational_reply, parse_user_message
from app.chat.responses import (
    balance_reply,
    connect_wallet_reply,
    fallback_reply,
    history_reply,
    history_type_for,
    history_unavailable_reply,
    send_reply,
    split_reply,
    unknown_reply,
)
from app.config import get_settings
from app.services.history_service import get_history
from db.models.transaction import TransactionStatus
from db.repos.chat_history_repo import add_message
from db.repos.conversations_repo import ConversationNotFoundError, touch_conversation
from db.repos.transactions_repo import create_transaction
from db.repos.users_repo import ensure_user
from db.utils import amount_in_range

logger = logging.getLogger(__name__)


class InvalidChatRequestError(ValueError):
    pass


def _history_payload(intent: ActionIntent, *, db: Session, wallet_address: str | None) -> str:
    history_type = history_type_for(intent)
    if not wallet_address:
        return connect_wallet_reply(history_type)

    settings = get_settings()
    try:
        rows = get_history(
            db,
            wallet_address=wallet_address,
            history_type=history_type,
            limit=intent.limit or settings.history_default_limit,
        )
    except Exception as exc:
        logger.warning("history lookup failed wallet=%s: %s", wallet_address, exc)
        db.rollback()
        return history_unavailable_reply(history_type)
    return history_reply(history_type, rows)


def render_reply(
    intent: ConversationIntent | ActionIntent,
    *,
    db: Session,
    wallet_address: str | None,
) -> str:
    if isinstance(intent, ConversationIntent):
        return generate_conversational_reply(intent.query)

    if intent.intent == IntentType.SEND:
        return send_reply(intent)
    if intent.intent == IntentType.SPLIT:
        return split_reply(intent)
    if intent.intent == IntentType.CHECK_BALANCE:
        return balance_reply(intent)
    if intent.intent in HISTORY_INTENTS:
        return _history_payload(intent, db=db, wallet_address=wallet_address)
    return unknown_reply()


def _recipient_of(parsed: dict[str, Any]) -> str:
    recipients = parsed.get("recipients") or []
    return recipients[0] if recipients else "unknown"


def persist_exchange(
    db: Session,
    *,
    wallet_address: str,
    conversation_id: int | None,
    user_text: str,
    reply: str,
    parsed: dict[str, Any],
    amount: Decimal | None = None,
) -> None:
    """
    Best-effort: stores both messages and, for send/split, a pending
    transaction. Failures are logged and rolled back, never raised.

    ``parsed`` is the JSON form of the intent; ``amount`` carries the exact
    decimal since the JSON form holds a float.
    """
    settings = get_settings()
    intent = parsed.get("intent")
    is_transaction = intent in {i.value for i in TRANSACTION_INTENTS}

    try:
        user, created = ensure_user(
            db,
            wallet_address=wallet_address,
            wallet_type=settings.default_wallet_type,
        )
        if created:
            logger.info("created user on first message wallet=%s", user.wallet_address)

        add_message(
            db,
            user_id=user.id,
            conversation_id=conversation_id,
            message=user_text,
            is_user=True,
        )
        add_message(
            db,
            user_id=user.id,
            conversation_id=conversation_id,
            message=reply,
            is_user=False,
            metadata={"transaction": parsed} if is_transaction else None,
        )

        if is_transaction and not amount_in_range(amount or 0):
            logger.warning("pending transaction skipped, amount out of range amount=%s", amount)
        elif is_transaction:
            tx = create_transaction(
                db,
                user_id=user.id,
                transaction_type=intent,
                amount=amount or 0,
                token=parsed.get("token") or settings.default_token,
                recipient_address=_recipient_of(parsed),
                status=TransactionStatus.PENDING.value,
                note=parsed.get("note") or "",
                metadata=parsed,
            )
            logger.info("pending transaction stored id=%s type=%s", tx.id, intent)

        if conversation_id is not None:
            try:
                touch_conversation(db, conversation_id=conversation_id)
            except ConversationNotFoundError:
                logger.warning("conversation not found conversation_id=%s", conversation_id)
    except Exception:
        logger.exception("failed to persist chat exchange wallet=%s", wallet_address)
        db.rollback()


def route_chat(req: ChatRequest, *, db: Session) -> ChatReply:
    last = req.messages[-1]
    if last.role != "user":
        raise InvalidChatRequestError("Invalid request: No user message found")

    text = last.content
    try:
        intent = parse_user_message(text)
        reply = render_reply(intent, db=db, wallet_address=req.walletAddress)
        parsed = intent_to_json(intent)
        amount = intent.amount if isinstance(intent, ActionIntent) else None
    except Exception:
        logger.exception("chat message handling failed, using fallback reply")
        reply = fallback_reply(text)
        parsed = {"intent": IntentType.UNKNOWN.value, "raw_message": text}
        amount = None

    if req.walletAddress:
        persist_exchange(
            db,
            wallet_address=req.walletAddress,
            conversation_id=req.conversationId,
            user_text=text,
            reply=reply,
            parsed=parsed,
            amount=amount,
        )

    return ChatReply(text=reply, parsed=parsed)
