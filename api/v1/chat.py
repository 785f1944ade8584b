from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.chat.contracts import ChatRequest
from app.chat.responses import GENERIC_FAILURE
from app.chat.router import InvalidChatRequestError, route_chat
from db.deps import get_db

router = APIRouter(prefix="/chat", tags=["chat"])
logger = logging.getLogger(__name__)

PARSED_DATA_HEADER = "X-Parsed-Data"


def _header_json(payload: dict) -> str:
    # header values must stay latin-1 safe
    return json.dumps(payload, ensure_ascii=True, separators=(",", ":"))


@router.post("", response_class=PlainTextResponse)
def chat(req: ChatRequest, db: Session = Depends(get_db)) -> PlainTextResponse:
    try:
        reply = route_chat(req, db=db)
    except InvalidChatRequestError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception:
        logger.exception("chat route failed")
        return PlainTextResponse(GENERIC_FAILURE, status_code=500)

    logger.info("chat reply sent intent=%s", reply.parsed.get("intent"))
    return PlainTextResponse(
        reply.text,
        headers={PARSED_DATA_HEADER: _header_json(reply.parsed)},
    )
