from __future__ import annotations

import logging
import os

from app.config import get_settings

logger = logging.getLogger(__name__)


def configure_langsmith() -> bool:
    """
    Exports the LangChain tracing variables when LANGSMITH_TRACING is on.
    Returns whether tracing was enabled. Never fails app startup.
    """
    s = get_settings()
    if not s.langsmith_tracing:
        return False

    if not s.langsmith_api_key:
        logger.warning("LANGSMITH_TRACING is set without LANGSMITH_API_KEY; traces will be rejected")

    env = {
        "LANGCHAIN_TRACING_V2": "true",
        "LANGCHAIN_PROJECT": s.langsmith_project,
        "LANGCHAIN_ENDPOINT": s.langsmith_endpoint,
    }
    if s.langsmith_api_key:
        env["LANGCHAIN_API_KEY"] = s.langsmith_api_key
    os.environ.update(env)

    logger.info("LangSmith tracing enabled project=%s", s.langsmith_project)
    return True
