from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict

from app.chat.prompts import build_conversation_prompt, build_intent_parser_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

_CODE_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class LLMClient:
    """
    Thin wrapper over the chat model. Every call sends a {"system", "user"}
    prompt and expects a single JSON object back.
    """

    def __init__(
        self,
        *,
        model: str | None = None,
        provider: str | None = None,
        api_key: str | None = None,
        temperature: float = 0.0,
        timeout_s: int = 30,
    ) -> None:
        self.model = model or DEFAULT_MODEL
        self.provider = provider
        self.api_key = api_key
        self.temperature = temperature
        self.timeout_s = timeout_s
        self._models: Dict[bool, Any] = {}

    @classmethod
    def from_settings(cls, settings, *, temperature: float) -> "LLMClient":
        return cls(
            model=settings.LLM_MODEL,
            provider=settings.LLM_PROVIDER,
            api_key=settings.OPENAI_API_KEY,
            temperature=temperature,
            timeout_s=settings.LLM_TIMEOUT_S,
        )

    def parse_intent(self, *, message: str) -> dict:
        """Raw intent object for one user message; validation is the caller's job."""
        prompt = build_intent_parser_prompt(message)
        return self._parse_json(self._call_provider(prompt=prompt))

    def converse(self, *, query: str, context: dict | None = None) -> dict:
        prompt = build_conversation_prompt(query, context)
        return self._parse_json(self._call_provider(prompt=prompt))

    def _call_provider(self, *, prompt: dict) -> str:
        if self.provider == "openai":
            return self._call_openai(prompt=prompt)
        raise RuntimeError(f"LLM provider not configured: {self.provider!r}")

    def _chat_model(self, *, json_mode: bool):
        if json_mode not in self._models:
            try:
                from langchain_openai import ChatOpenAI
            except Exception as e:
                raise RuntimeError(f"LangChain OpenAI client not available: {e}") from e

            self._models[json_mode] = ChatOpenAI(
                model=self.model,
                temperature=self.temperature,
                timeout=self.timeout_s,
                max_retries=1,
                api_key=self.api_key,
                model_kwargs={"response_format": {"type": "json_object"}} if json_mode else {},
            )
        return self._models[json_mode]

    def _call_openai(self, *, prompt: dict) -> str:
        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is not set")
        from langchain_core.messages import HumanMessage, SystemMessage

        messages = [
            SystemMessage(content=prompt["system"]),
            HumanMessage(content=prompt["user"]),
        ]

        try:
            return self._invoke(messages, json_mode=True)
        except Exception as e:
            # retry once without response_format
            logger.warning("LLM json_mode call failed model=%s: %s", self.model, e)
            return self._invoke(messages, json_mode=False)

    def _invoke(self, messages: list, *, json_mode: bool) -> str:
        logger.info("LLM call start model=%s json_mode=%s", self.model, json_mode)
        response = self._chat_model(json_mode=json_mode).invoke(messages)
        content = response.content
        if not content:
            raise RuntimeError("OpenAI returned empty content")
        if not isinstance(content, str):
            content = json.dumps(content)
        logger.info("LLM call success model=%s output_len=%s", self.model, len(content))
        return content

    def _parse_json(self, text: str) -> Dict[str, Any]:
        if not isinstance(text, str) or not text.strip():
            raise ValueError("LLM returned empty response")
        text = _CODE_FENCE_RE.sub("", text).strip()

        start, end = text.find("{"), text.rfind("}")
        candidates = [text]
        if start != -1 and end > start:
            candidates.append(text[start : end + 1])

        for candidate in candidates:
            try:
                parsed = json.loads(candidate)
            except json.JSONDecodeError:
                continue
            if isinstance(parsed, dict):
                return parsed
            raise ValueError("LLM returned a non-object JSON value")
        raise ValueError(f"LLM output is not JSON: {text[:80]!r}")
