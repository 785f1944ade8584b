from __future__ import annotations

from decimal import Decimal

import pytest

from app.chat.contracts import ActionIntent, ConversationIntent, SplitType
from app.chat.fallback_parser import (
    classify_keywords,
    extract_amount,
    extract_note,
    extract_recipients,
    parse_message,
)


@pytest.mark.parametrize(
    "text",
    [
        "hi",
        "Hello there",
        "hey lucra",
        "What is the balance?",
        "who made this",
        "How do I send ETH",
        "tell me about Base",
        "explain gas fees",
        "can you send 5 to @bob",
        "send 5 to @bob?",
        "please help me send money",
        "thanks!",
        "Thank you so much",
    ],
)
def test_conversational_patterns_win(text):
    result = parse_message(text)
    assert isinstance(result, ConversationIntent)
    assert result.intent == "conversation"
    assert result.is_conversational is True
    assert result.query == text
    assert result.parsed_by == "fallback"


def test_send_example():
    result = parse_message("Send 50 ETH to @alice.base")
    assert isinstance(result, ActionIntent)
    assert result.intent == "send"
    assert result.amount == 50
    assert result.token == "ETH"
    assert result.recipients == ["alice.base"]
    assert result.split_type is None
    assert result.note is None
    assert result.is_conversational is False


def test_split_example():
    result = parse_message("Split 100 equally between @bob and @charlie for dinner")
    assert result.intent == "split"
    assert result.amount == 100
    assert result.recipients == ["bob", "charlie"]
    assert result.split_type == SplitType.EQUAL
    assert result.note == "dinner"


def test_split_without_equal_has_no_split_type():
    result = parse_message("split 30 with @dan")
    assert result.intent == "split"
    assert result.split_type is None


def test_unknown_never_raises():
    result = parse_message("xyz abc")
    assert result.intent == "unknown"
    assert result.amount is None
    assert result.recipients == []
    assert result.split_type is None
    assert result.note is None
    assert result.token == "ETH"


@pytest.mark.parametrize("text", ["", "   ", "@", "12.", "....", "\n"])
def test_degenerate_input_is_handled(text):
    result = parse_message(text)
    assert result.intent in {"unknown", "conversation"}


def test_keyword_precedence_send_beats_balance():
    result = parse_message("send my balance to @eve")
    assert result.intent == "send"


def test_keyword_precedence_send_beats_history():
    assert classify_keywords("transfer history to @x") == "send"


def test_pay_and_transfer_map_to_send():
    assert parse_message("pay @bob 3").intent == "send"
    assert parse_message("transfer 3 to @bob").intent == "send"


def test_balance_and_history_keywords():
    assert parse_message("check my balance").intent == "check_balance"
    assert parse_message("show transactions").intent == "transaction_history"
    assert parse_message("my history please").intent == "transaction_history"


def test_recipients_keep_order_and_duplicates():
    assert extract_recipients("pay @bob @amy @bob") == ["bob", "amy", "bob"]


def test_recipient_single_dotted_suffix_only():
    assert extract_recipients("send to @alice.base.eth") == ["alice.base"]


def test_first_number_is_the_amount():
    assert extract_amount("send 2.5 then 7") == Decimal("2.5")
    assert extract_amount("no numbers here") is None


def test_note_after_for_or_note():
    assert extract_note("send 5 to @bob for Lunch Money") == "lunch money"
    assert extract_note("send 5 to @bob note rent") == "rent"
    assert extract_note("send 5 to @bob") is None


def test_token_always_eth():
    assert parse_message("send 5 USDC to @bob").token == "ETH"


def test_parser_is_idempotent():
    text = "Split 100 equally between @bob and @charlie for dinner"
    assert parse_message(text) == parse_message(text)
