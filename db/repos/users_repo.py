from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.user import User
from db.utils.time import utcnow


class UserNotFoundError(Exception):
    pass


def normalize_wallet(wallet_address: str) -> str:
    return wallet_address.strip().lower()


def get_user(db: Session, user_id: uuid.UUID) -> User | None:
    return db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()


def get_user_by_wallet(db: Session, wallet_address: str) -> User | None:
    # duplicates are possible; the oldest row wins
    stmt = (
        select(User)
        .where(User.wallet_address == normalize_wallet(wallet_address))
        .order_by(User.created_at.asc())
        .limit(1)
    )
    return db.execute(stmt).scalars().first()


def create_user(db: Session, *, wallet_address: str, wallet_type: str = "wagmi") -> User:
    user = User(
        wallet_address=normalize_wallet(wallet_address),
        wallet_type=wallet_type or "wagmi",
        is_verified=False,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def ensure_user(db: Session, *, wallet_address: str, wallet_type: str = "wagmi") -> tuple[User, bool]:
    """
    Returns (user, created). Select first, insert only when absent.

    There is no lock between the two steps, so two concurrent first requests
    for the same address may both insert.
    """
    user = get_user_by_wallet(db, wallet_address)
    if user is not None:
        return user, False
    return create_user(db, wallet_address=wallet_address, wallet_type=wallet_type), True


def store_user(db: Session, *, wallet_address: str, wallet_type: str | None = None) -> User:
    user = get_user_by_wallet(db, wallet_address)
    if user is None:
        return create_user(db, wallet_address=wallet_address, wallet_type=wallet_type or "unknown")

    user.wallet_type = wallet_type or user.wallet_type or "unknown"
    user.updated_at = utcnow()
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def mark_user_verified(db: Session, *, wallet_address: str) -> User:
    user = get_user_by_wallet(db, wallet_address)
    if user is None:
        raise UserNotFoundError(f"User not found: {wallet_address}")

    user.is_verified = True
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
