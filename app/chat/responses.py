from __future__ import annotations

from decimal import Decimal
from typing import Any

from app.chat.contracts import ActionIntent, HistoryType, IntentType, SplitType

BOT_PREFIX = "🤖 "

CONVERSATION_APOLOGY = (
    "🤖 I apologize, but I encountered an issue processing your request. "
    "How else can I assist you with your crypto needs?"
)
GENERIC_FAILURE = "Sorry, an error occurred while processing your request."

BALANCE_SENTINEL = "__FETCH_BALANCE__"

_SMART_WALLET_PHRASES = ("smart wallet", "smart account", "agent wallet")
_MAIN_WALLET_PHRASES = ("main wallet", "connected wallet", "my wallet")

_HISTORY_LABELS = {
    HistoryType.TRANSACTIONS: "transaction",
    HistoryType.CHAT: "chat",
    HistoryType.ALL: "",
}


def _label(history_type: HistoryType) -> str:
    label = _HISTORY_LABELS[history_type]
    return f"{label} " if label else ""


def format_amount(amount: Decimal | float | int | None) -> str:
    if amount is None:
        return "an unspecified amount of"
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return str(value.quantize(Decimal(1)))
    return format(value.normalize(), "f")


def _handles(recipients: list[str], default: str) -> str:
    if not recipients:
        return default
    return " and ".join(f"@{r}" for r in recipients)


def _note_suffix(note: str | None) -> str:
    if not note:
        return ""
    if note.lower().startswith("for "):
        return f" {note}"
    return f" for {note}"


def fallback_reply(text: str) -> str:
    return f'🤖 I understand you said: "{text}". How can I help you with that?'


def send_reply(intent: ActionIntent) -> str:
    return (
        f"🤖 I've prepared a transaction to send {format_amount(intent.amount)} {intent.token} "
        f"to {_handles(intent.recipients, 'the recipient')}{_note_suffix(intent.note)}. "
        "Would you like to confirm this transaction?"
    )


def split_reply(intent: ActionIntent) -> str:
    how = "equally" if intent.split_type == SplitType.EQUAL else "as specified"
    return (
        f"🤖 I'll split {format_amount(intent.amount)} {intent.token} {how} "
        f"between {_handles(intent.recipients, 'the recipients')}{_note_suffix(intent.note)}. "
        "Is this correct?"
    )


def balance_wallet_type(text: str | None) -> str:
    lower = (text or "").lower()
    if any(p in lower for p in _SMART_WALLET_PHRASES):
        return "smart"
    if any(p in lower for p in _MAIN_WALLET_PHRASES):
        return "main"
    return "both"


def balance_reply(intent: ActionIntent) -> str:
    """The UI swaps the sentinel for the on-chain balance."""
    return f"🤖 {BALANCE_SENTINEL}:{balance_wallet_type(intent.raw_message)}__"


def history_type_for(intent: ActionIntent) -> HistoryType:
    if intent.history_type is not None:
        return intent.history_type
    if intent.intent == IntentType.TRANSACTION_HISTORY:
        return HistoryType.TRANSACTIONS
    if intent.intent == IntentType.CHAT_HISTORY:
        return HistoryType.CHAT
    return HistoryType.ALL


def connect_wallet_reply(history_type: HistoryType) -> str:
    return f"🤖 Please connect your wallet to view your {_label(history_type)}history."


def history_unavailable_reply(history_type: HistoryType) -> str:
    return (
        f"🤖 I'm having trouble retrieving your {_label(history_type)}history right now. "
        "Please try again later."
    )


def history_reply(history_type: HistoryType, rows: list[dict[str, Any]]) -> str:
    if history_type == HistoryType.TRANSACTIONS:
        if not rows:
            return (
                "🤖 You don't have any transaction history yet. "
                "Once you make transactions, they'll appear here."
            )
        total = sum((Decimal(str(r.get("amount") or 0)) for r in rows), Decimal(0))
        latest = rows[0]["created_at"]
        return (
            f"🤖 Here's your recent transaction history. You've made {len(rows)} transactions, "
            f"with the most recent on {latest:%Y-%m-%d}, totaling approximately "
            f"{total:.2f} {rows[0].get('token') or 'ETH'}."
        )

    if history_type == HistoryType.CHAT:
        if not rows:
            return (
                "🤖 You don't have any chat history yet. "
                "As we converse, your chat history will be saved here."
            )
        latest = rows[0]["created_at"]
        return (
            f"🤖 I found {len(rows)} messages in your chat history, "
            f"with the most recent from {latest:%Y-%m-%d}."
        )

    if not rows:
        return "🤖 You don't have any history yet. As you use Lucra AI, your history will be saved here."
    tx_count = sum(1 for r in rows if "transaction_type" in r)
    chat_count = sum(1 for r in rows if "is_user" in r)
    return f"🤖 I found {len(rows)} items in your history: {tx_count} transactions and {chat_count} chat messages."


def unknown_reply() -> str:
    return "🤖 I understand you want to do something. How can I help you with that?"
