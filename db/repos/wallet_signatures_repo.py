from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.wallet_signature import WalletSignature
from db.repos.users_repo import normalize_wallet


def get_signature(db: Session, wallet_address: str) -> WalletSignature | None:
    stmt = (
        select(WalletSignature)
        .where(WalletSignature.wallet_address == normalize_wallet(wallet_address))
        .order_by(WalletSignature.updated_at.desc())
        .limit(1)
    )
    return db.execute(stmt).scalars().first()


def upsert_signature(db: Session, *, wallet_address: str, signature: str, message: str) -> WalletSignature:
    row = get_signature(db, wallet_address)
    if row is None:
        row = WalletSignature(
            wallet_address=normalize_wallet(wallet_address),
            signature=signature,
            message=message,
        )
    else:
        row.signature = signature
        row.message = message

    db.add(row)
    db.commit()
    db.refresh(row)
    return row
