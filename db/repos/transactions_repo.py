from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.transaction import Transaction, TransactionStatus


class TransactionNotFoundError(Exception):
    pass


def create_transaction(
    db: Session,
    *,
    user_id: uuid.UUID,
    transaction_type: str,
    amount: Decimal | float | int,
    recipient_address: str,
    token: str = "ETH",
    transaction_hash: str | None = None,
    status: str = TransactionStatus.PENDING.value,
    note: str = "",
    metadata: dict[str, Any] | None = None,
) -> Transaction:
    tx = Transaction(
        user_id=user_id,
        transaction_hash=transaction_hash,
        transaction_type=transaction_type,
        amount=Decimal(str(amount)),
        token=token or "ETH",
        recipient_address=recipient_address,
        status=status or TransactionStatus.PENDING.value,
        note=note or "",
        meta=metadata,
    )
    db.add(tx)
    db.commit()
    db.refresh(tx)
    return tx


def get_transaction(db: Session, transaction_id: int) -> Transaction | None:
    return db.execute(select(Transaction).where(Transaction.id == transaction_id)).scalar_one_or_none()


def update_transaction(
    db: Session,
    *,
    transaction_id: int,
    user_id: uuid.UUID,
    status: str,
    transaction_hash: str | None = None,
) -> Transaction:
    stmt = select(Transaction).where(
        Transaction.id == transaction_id,
        Transaction.user_id == user_id,
    )
    tx = db.execute(stmt).scalar_one_or_none()
    if not tx:
        raise TransactionNotFoundError(f"Transaction not found: {transaction_id}")

    tx.status = status
    if transaction_hash is not None:
        tx.transaction_hash = transaction_hash

    db.add(tx)
    db.commit()
    db.refresh(tx)
    return tx


def list_transactions_for_user(db: Session, *, user_id: uuid.UUID, limit: int = 50) -> list[Transaction]:
    stmt = (
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
        .limit(limit)
    )
    return list(db.execute(stmt).scalars().all())
