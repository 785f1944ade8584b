from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.schemas.history import HistoryRequest, HistoryResponse
from app.services.history_service import format_history, get_history
from db.deps import get_db

router = APIRouter(prefix="/history", tags=["history"])


@router.post("", response_model=HistoryResponse)
def history_endpoint(payload: HistoryRequest, db: Session = Depends(get_db)) -> HistoryResponse:
    rows = get_history(
        db,
        wallet_address=payload.walletAddress,
        history_type=payload.type,
        limit=payload.limit,
    )
    return HistoryResponse(data=rows, formattedResponse=format_history(rows, payload.type))
