"""Rule-based intent parser used when the LLM parse is unavailable or fails.

Pure and deterministic: no I/O, no state, never raises on any string input.
"""
from __future__ import annotations

import re
from decimal import Decimal

from app.chat.contracts import ActionIntent, ConversationIntent, IntentType, SplitType

PARSED_BY = "fallback"

_CONVERSATIONAL_PATTERNS = [
    re.compile(p)
    for p in (
        r"^hi\b",
        r"^hello\b",
        r"^hey\b",
        r"^what",
        r"^who",
        r"^how",
        r"^when",
        r"^where",
        r"^why",
        r"^tell me about",
        r"^explain",
        r"^can you",
        r"\?$",
        r"help me",
        r"^thanks",
        r"^thank you",
    )
]

_RECIPIENT_RE = re.compile(r"@(\w+(?:\.\w+)?)", re.ASCII)
_AMOUNT_RE = re.compile(r"\b(\d+(?:\.\d+)?)\b", re.ASCII)
_NOTE_RE = re.compile(r"\b(?:for|note)\b\s+(.+)$", re.ASCII | re.DOTALL)

# order is precedence
_INTENT_KEYWORDS: list[tuple[IntentType, tuple[str, ...]]] = [
    (IntentType.SEND, ("send", "pay", "transfer")),
    (IntentType.SPLIT, ("split",)),
    (IntentType.CHECK_BALANCE, ("balance", "check")),
    (IntentType.TRANSACTION_HISTORY, ("history", "transactions")),
]


def is_conversational(text: str) -> bool:
    lower = text.strip().lower()
    return any(p.search(lower) for p in _CONVERSATIONAL_PATTERNS)


def extract_recipients(text: str) -> list[str]:
    return _RECIPIENT_RE.findall(text)


def extract_amount(text: str) -> Decimal | None:
    match = _AMOUNT_RE.search(text)
    if not match:
        return None
    return Decimal(match.group(1))


def extract_note(text: str) -> str | None:
    match = _NOTE_RE.search(text.lower())
    if not match:
        return None
    return match.group(1).strip() or None


def classify_keywords(text: str) -> IntentType:
    lower = text.lower()
    for intent, keywords in _INTENT_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return intent
    return IntentType.UNKNOWN


def parse_message(text: str) -> ConversationIntent | ActionIntent:
    text = text or ""

    if is_conversational(text):
        return ConversationIntent(query=text, raw_message=text, parsed_by=PARSED_BY)

    intent = classify_keywords(text)
    split_type = None
    if intent == IntentType.SPLIT and "equal" in text.lower():
        split_type = SplitType.EQUAL

    return ActionIntent(
        intent=intent.value,
        amount=extract_amount(text),
        token="ETH",
        recipients=extract_recipients(text),
        split_type=split_type,
        note=extract_note(text),
        raw_message=text,
        parsed_by=PARSED_BY,
    )
