from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import ValidationError

from app.chat.contracts import ActionIntent, ConversationIntent, IntentType, parsed_intent_adapter
from app.chat.fallback_parser import parse_message
from app.chat.responses import CONVERSATION_APOLOGY, BOT_PREFIX
from app.config import get_settings
from llm.client import LLMClient

logger = logging.getLogger(__name__)

PARSED_BY = "llm"


class LLMUnavailableError(RuntimeError):
    pass


def _client(*, temperature: float) -> LLMClient:
    settings = get_settings()
    if not settings.LLM_ENABLED:
        raise LLMUnavailableError("llm_disabled")
    if not settings.OPENAI_API_KEY:
        raise LLMUnavailableError("missing_api_key")
    return LLMClient.from_settings(settings, temperature=temperature)


def normalize_llm_intent(raw: Dict[str, Any], message: str) -> ConversationIntent | ActionIntent:
    """
    Fills defaults the model tends to omit, then validates against the intent union.
    Raises ValidationError when the model output is not an intent record.
    """
    data = dict(raw)
    data["raw_message"] = message
    data["parsed_by"] = PARSED_BY

    if data.get("isConversational") or data.get("intent") == IntentType.CONVERSATION.value:
        return ConversationIntent(
            query=data.get("query") or message,
            raw_message=message,
            parsed_by=PARSED_BY,
        )

    data["isConversational"] = False
    data["token"] = data.get("token") or get_settings().default_token
    recipients = data.get("recipients") or []
    if isinstance(recipients, str):
        recipients = [recipients]
    if isinstance(recipients, list):
        recipients = [h for h in (str(r).strip().lstrip("@") for r in recipients) if h]
    data["recipients"] = recipients
    for key in ("amount", "split_type", "note", "history_type", "limit"):
        data[key] = data.get(key) or None
    return parsed_intent_adapter.validate_python(data)


def parse_with_llm(message: str) -> ConversationIntent | ActionIntent:
    settings = get_settings()
    llm_client = _client(temperature=settings.LLM_TEMPERATURE)
    raw = llm_client.parse_intent(message=message)
    return normalize_llm_intent(raw, message)


def parse_user_message(message: str) -> ConversationIntent | ActionIntent:
    """LLM first; the rule-based parser on any failure."""
    try:
        parsed = parse_with_llm(message)
        logger.info("message parsed by llm intent=%s", parsed.intent)
        return parsed
    except LLMUnavailableError as exc:
        logger.info("llm unavailable (%s), using fallback parser", exc)
    except ValidationError as exc:
        logger.warning("llm output did not validate, using fallback parser: %s", exc.error_count())
    except Exception as exc:
        logger.warning("llm parse failed, using fallback parser: %s", exc)

    parsed = parse_message(message)
    logger.info("message parsed by fallback intent=%s", parsed.intent)
    return parsed


def generate_conversational_reply(query: str, context: Dict[str, Any] | None = None) -> str:
    settings = get_settings()
    try:
        llm_client = _client(temperature=settings.LLM_CHAT_TEMPERATURE)
        parsed = llm_client.converse(query=query, context=context)
    except LLMUnavailableError:
        return CONVERSATION_APOLOGY
    except Exception as exc:
        logger.warning("conversational reply failed: %s", exc)
        return CONVERSATION_APOLOGY

    message = parsed.get("message")
    if not isinstance(message, str) or not message.strip():
        return CONVERSATION_APOLOGY
    message = message.strip()
    if not message.startswith(BOT_PREFIX.strip()):
        message = BOT_PREFIX + message
    return message
