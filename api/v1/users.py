from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from api.schemas.users import (
    UserEnsureRequest,
    UserEnsureResponse,
    UserRead,
    UserStoreRequest,
)
from app.config import get_settings
from db.deps import get_db
from db.repos.users_repo import ensure_user, get_user_by_wallet, store_user

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("/ensure", response_model=UserEnsureResponse)
def ensure_user_endpoint(
    payload: UserEnsureRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> UserEnsureResponse:
    wallet_type = payload.walletType or get_settings().default_wallet_type
    user, created = ensure_user(db, wallet_address=payload.walletAddress, wallet_type=wallet_type)
    if created:
        logger.info("user created wallet=%s", user.wallet_address)
        response.status_code = 201
        return UserEnsureResponse(message="User created successfully", user=UserRead.model_validate(user))
    return UserEnsureResponse(message="User already exists", user=UserRead.model_validate(user))


@router.get("/get", response_model=UserRead | None)
def get_user_endpoint(
    walletAddress: str = Query(default="", max_length=128),
    db: Session = Depends(get_db),
) -> UserRead | None:
    if not walletAddress:
        raise HTTPException(status_code=400, detail="Missing wallet address")
    user = get_user_by_wallet(db, walletAddress)
    return UserRead.model_validate(user) if user else None


@router.post("/store", response_model=UserRead)
def store_user_endpoint(payload: UserStoreRequest, db: Session = Depends(get_db)) -> UserRead:
    user = store_user(db, wallet_address=payload.walletAddress, wallet_type=payload.walletType)
    return UserRead.model_validate(user)
