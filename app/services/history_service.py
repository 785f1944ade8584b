from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.chat.contracts import HistoryType
from app.chat.responses import format_amount
from db.models.chat_message import ChatMessage
from db.models.transaction import Transaction
from db.repos.chat_history_repo import list_messages_for_user
from db.repos.transactions_repo import list_transactions_for_user
from db.repos.users_repo import get_user_by_wallet

logger = logging.getLogger(__name__)

CHAT_PREVIEW_LEN = 100


def _transaction_row(tx: Transaction) -> dict[str, Any]:
    return {
        "id": tx.id,
        "transaction_hash": tx.transaction_hash,
        "transaction_type": tx.transaction_type,
        "amount": tx.amount,
        "token": tx.token,
        "recipient_address": tx.recipient_address,
        "status": tx.status,
        "note": tx.note,
        "created_at": tx.created_at,
    }


def _chat_row(msg: ChatMessage) -> dict[str, Any]:
    return {
        "id": msg.id,
        "conversation_id": msg.conversation_id,
        "message": msg.message,
        "is_user": msg.is_user,
        "created_at": msg.created_at,
    }


def get_history(
    db: Session,
    *,
    wallet_address: str,
    history_type: HistoryType = HistoryType.ALL,
    limit: int = 10,
) -> list[dict[str, Any]]:
    """
    Newest-first history rows for a wallet. Transaction rows carry
    ``transaction_type``, chat rows carry ``is_user``.
    """
    user = get_user_by_wallet(db, wallet_address)
    if user is None:
        return []

    rows: list[dict[str, Any]] = []
    if history_type in (HistoryType.TRANSACTIONS, HistoryType.ALL):
        rows.extend(_transaction_row(tx) for tx in list_transactions_for_user(db, user_id=user.id, limit=limit))
    if history_type in (HistoryType.CHAT, HistoryType.ALL):
        rows.extend(_chat_row(m) for m in list_messages_for_user(db, user_id=user.id, limit=limit))

    rows.sort(key=lambda r: r["created_at"], reverse=True)
    return rows[:limit]


def _format_date(value: datetime) -> str:
    return value.strftime("%B %d, %Y")


def format_history(rows: list[dict[str, Any]], history_type: HistoryType) -> str:
    if not rows:
        label = {HistoryType.TRANSACTIONS: "transaction ", HistoryType.CHAT: "chat "}.get(history_type, "")
        return f"No {label}history found."

    transactions = [r for r in rows if "transaction_type" in r]
    messages = [r for r in rows if "is_user" in r]
    lines: list[str] = []

    if transactions:
        lines.append("## Transaction History\n")
        for index, tx in enumerate(transactions, start=1):
            lines.append(
                f"{index}. **{tx['transaction_type'].upper()}**: "
                f"{format_amount(tx['amount'])} {tx['token']} to {tx['recipient_address']}"
            )
            lines.append(f"   - **Status**: {tx['status']}")
            lines.append(f"   - **Date**: {_format_date(tx['created_at'])}")
            if tx.get("note"):
                lines.append(f"   - **Note**: {tx['note']}")
            if tx.get("transaction_hash"):
                lines.append(f"   - **Hash**: {tx['transaction_hash']}")
            lines.append("")
    elif history_type == HistoryType.TRANSACTIONS:
        lines.append("No transaction history found.\n")

    if messages:
        lines.append("## Chat History\n")
        for index, msg in enumerate(messages, start=1):
            text = msg["message"]
            preview = text[:CHAT_PREVIEW_LEN] + ("..." if len(text) > CHAT_PREVIEW_LEN else "")
            who = "You" if msg["is_user"] else "AI"
            lines.append(f"{index}. **{who}**: {preview}")
            lines.append(f"   - **Date**: {_format_date(msg['created_at'])}")
            lines.append("")
    elif history_type == HistoryType.CHAT:
        lines.append("No chat history found.\n")

    return "\n".join(lines).strip() or "No history found for this wallet address."
