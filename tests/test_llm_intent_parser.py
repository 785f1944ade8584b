from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from app.chat.contracts import ActionIntent, ConversationIntent
from app.chat.llm import generate_conversational_reply, normalize_llm_intent, parse_user_message
from app.chat.responses import CONVERSATION_APOLOGY
from app.config import get_settings
from llm.client import LLMClient


@pytest.fixture
def llm_on(monkeypatch):
    monkeypatch.setenv("LLM_ENABLED", "true")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_disabled_llm_uses_fallback():
    result = parse_user_message("Send 50 ETH to @alice.base")
    assert result.parsed_by == "fallback"
    assert result.intent == "send"


@pytest.mark.use_llm
def test_missing_api_key_uses_fallback(monkeypatch):
    monkeypatch.setenv("LLM_ENABLED", "true")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    get_settings.cache_clear()

    with patch.object(LLMClient, "parse_intent") as parse_intent:
        result = parse_user_message("check my balance")

    parse_intent.assert_not_called()
    assert result.parsed_by == "fallback"
    assert result.intent == "check_balance"


@pytest.mark.use_llm
def test_llm_result_is_used(llm_on):
    raw = {
        "intent": "send",
        "amount": 12.5,
        "token": "USDC",
        "recipients": ["@bob.base"],
        "split_type": None,
        "note": "for rent",
        "isConversational": False,
    }
    with patch.object(LLMClient, "parse_intent", return_value=raw):
        result = parse_user_message("send bob 12.5 usdc for rent")

    assert isinstance(result, ActionIntent)
    assert result.parsed_by == "llm"
    assert result.token == "USDC"
    assert result.recipients == ["bob.base"]
    assert result.note == "for rent"
    assert float(result.amount) == 12.5


@pytest.mark.use_llm
def test_llm_network_error_falls_back(llm_on):
    with patch.object(LLMClient, "parse_intent", side_effect=RuntimeError("connection reset")):
        result = parse_user_message("Split 100 equally between @bob and @charlie for dinner")

    assert result.parsed_by == "fallback"
    assert result.intent == "split"
    assert result.recipients == ["bob", "charlie"]


@pytest.mark.use_llm
def test_llm_invalid_intent_falls_back(llm_on):
    with patch.object(LLMClient, "parse_intent", return_value={"intent": "swap", "amount": 1}):
        result = parse_user_message("pay @bob 1")

    assert result.parsed_by == "fallback"
    assert result.intent == "send"


@pytest.mark.use_llm
def test_llm_malformed_json_falls_back(llm_on):
    with patch.object(LLMClient, "_call_provider", return_value="sure! here you go"):
        result = parse_user_message("xyz abc")

    assert result.parsed_by == "fallback"
    assert result.intent == "unknown"


def test_normalize_conversational_flag_wins():
    result = normalize_llm_intent({"intent": "send", "isConversational": True}, "who are you")
    assert isinstance(result, ConversationIntent)
    assert result.query == "who are you"


def test_normalize_fills_defaults():
    result = normalize_llm_intent({"intent": "check_balance"}, "balance pls")
    assert result.token == "ETH"
    assert result.recipients == []
    assert result.amount is None
    assert result.raw_message == "balance pls"


def test_normalize_wraps_single_recipient_string():
    result = normalize_llm_intent({"intent": "send", "amount": 5, "recipients": "@bob"}, "send 5 to @bob")
    assert result.recipients == ["bob"]


def test_normalize_rejects_non_list_recipients():
    with pytest.raises(ValidationError):
        normalize_llm_intent({"intent": "send", "amount": 5, "recipients": {"to": "bob"}}, "send 5")


@pytest.mark.use_llm
def test_llm_string_recipient_reaches_reply(llm_on):
    with patch.object(LLMClient, "parse_intent", return_value={"intent": "send", "amount": 5, "recipients": "@bob"}):
        result = parse_user_message("send 5 to bob")

    assert result.parsed_by == "llm"
    assert result.recipients == ["bob"]


def test_conversational_reply_apologizes_when_llm_disabled():
    assert generate_conversational_reply("what is base?") == CONVERSATION_APOLOGY


@pytest.mark.use_llm
def test_conversational_reply_gets_bot_prefix(llm_on):
    with patch.object(LLMClient, "converse", return_value={"message": "Base is an Ethereum L2."}):
        reply = generate_conversational_reply("what is base?")
    assert reply == "🤖 Base is an Ethereum L2."


@pytest.mark.use_llm
def test_conversational_reply_failure_apologizes(llm_on):
    with patch.object(LLMClient, "converse", side_effect=TimeoutError("slow")):
        assert generate_conversational_reply("what is base?") == CONVERSATION_APOLOGY


def test_parse_json_strips_code_fences():
    client = LLMClient(provider="openai", api_key="x")
    text = '```json\n{"intent": "check_balance"}\n```'
    assert client._parse_json(text) == {"intent": "check_balance"}


def test_parse_json_extracts_embedded_object():
    client = LLMClient(provider="openai", api_key="x")
    assert client._parse_json('Extracted JSON: {"intent": "send"} done') == {"intent": "send"}


def test_parse_json_rejects_empty():
    client = LLMClient(provider="openai", api_key="x")
    with pytest.raises(ValueError):
        client._parse_json("   ")


def test_unconfigured_provider_raises():
    client = LLMClient(provider=None)
    with pytest.raises(RuntimeError):
        client.parse_intent(message="hi")
