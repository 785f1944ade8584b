from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.schemas.transactions import (
    TransactionRead,
    TransactionResponse,
    TransactionStoreRequest,
    TransactionSyncRequest,
    TransactionSyncResponse,
    TransactionUpdateRequest,
)
from app.config import get_settings
from db.deps import get_db
from db.models.transaction import TransactionStatus
from db.repos.transactions_repo import (
    TransactionNotFoundError,
    create_transaction,
    update_transaction,
)
from db.repos.users_repo import ensure_user, get_user_by_wallet

router = APIRouter(prefix="/transactions", tags=["transactions"])
logger = logging.getLogger(__name__)


@router.post("/store", response_model=TransactionResponse)
def store_transaction_endpoint(
    payload: TransactionStoreRequest,
    db: Session = Depends(get_db),
) -> TransactionResponse:
    settings = get_settings()
    user, _ = ensure_user(
        db,
        wallet_address=payload.walletAddress,
        wallet_type=settings.default_wallet_type,
    )

    explorer_url = payload.explorerUrl or settings.explorer_tx_url.format(hash=payload.transactionHash)
    tx = create_transaction(
        db,
        user_id=user.id,
        transaction_hash=payload.transactionHash,
        transaction_type=payload.transactionType or "send",
        amount=payload.amount,
        token=payload.token or settings.default_token,
        recipient_address=payload.recipientAddress,
        status=payload.status or TransactionStatus.PENDING.value,
        note=payload.note or "",
        metadata={
            "network": payload.network or settings.default_network,
            "explorer_url": explorer_url,
        },
    )
    logger.info("transaction stored id=%s hash=%s", tx.id, tx.transaction_hash)
    return TransactionResponse(data=TransactionRead.model_validate(tx))


@router.post("/update", response_model=TransactionResponse)
def update_transaction_endpoint(
    payload: TransactionUpdateRequest,
    db: Session = Depends(get_db),
) -> TransactionResponse:
    user = get_user_by_wallet(db, payload.walletAddress)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    try:
        tx = update_transaction(
            db,
            transaction_id=payload.transactionId,
            user_id=user.id,
            status=payload.status,
            transaction_hash=payload.transactionHash,
        )
    except TransactionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Transaction not found") from exc

    logger.info("transaction updated id=%s status=%s", tx.id, tx.status)
    return TransactionResponse(data=TransactionRead.model_validate(tx))


@router.post("/sync", response_model=TransactionSyncResponse)
def sync_transactions_endpoint(
    payload: TransactionSyncRequest,
    db: Session = Depends(get_db),
) -> TransactionSyncResponse:
    # TODO: pull the wallet's transfers from the Basescan API and insert the missing ones
    ensure_user(db, wallet_address=payload.walletAddress, wallet_type=get_settings().default_wallet_type)
    return TransactionSyncResponse(message="Transaction sync initiated")
