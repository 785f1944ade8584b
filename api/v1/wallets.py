from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from web3 import Web3

from api.schemas.wallets import (
    VerificationMessageResponse,
    WalletVerificationStatus,
    WalletVerifyRequest,
    WalletVerifyResponse,
)
from app.config import get_settings
from app.services.wallet_verification import (
    InvalidSignatureError,
    build_verification_message,
    is_wallet_verified,
    verify_and_store,
)
from db.deps import get_db

router = APIRouter(prefix="/wallets", tags=["wallets"])
logger = logging.getLogger(__name__)


def _validate_wallet_address(wallet: str) -> None:
    if not wallet or not Web3.is_address(wallet):
        raise HTTPException(status_code=400, detail="walletAddress must be a valid 0x address")


@router.get("/verification-message", response_model=VerificationMessageResponse)
def verification_message_endpoint(walletAddress: str = Query(default="")) -> VerificationMessageResponse:
    _validate_wallet_address(walletAddress)
    return VerificationMessageResponse(
        walletAddress=walletAddress,
        message=build_verification_message(walletAddress),
    )


@router.post("/verify", response_model=WalletVerifyResponse)
def verify_wallet_endpoint(payload: WalletVerifyRequest, db: Session = Depends(get_db)) -> WalletVerifyResponse:
    _validate_wallet_address(payload.walletAddress)
    try:
        verify_and_store(
            db,
            wallet_address=payload.walletAddress,
            message=payload.message,
            signature=payload.signature,
            wallet_type=payload.walletType or get_settings().default_wallet_type,
        )
    except InvalidSignatureError as exc:
        logger.info("wallet verification rejected wallet=%s", payload.walletAddress)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return WalletVerifyResponse(verified=True)


@router.get("/verification", response_model=WalletVerificationStatus)
def verification_status_endpoint(
    walletAddress: str = Query(default=""),
    db: Session = Depends(get_db),
) -> WalletVerificationStatus:
    _validate_wallet_address(walletAddress)
    return WalletVerificationStatus(
        walletAddress=walletAddress,
        verified=is_wallet_verified(db, walletAddress),
    )
