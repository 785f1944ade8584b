from __future__ import annotations

import logging
from datetime import datetime

from eth_account import Account
from eth_account.messages import encode_defunct
from sqlalchemy.orm import Session
from web3 import Web3

from db.models.user import User
from db.repos.users_repo import ensure_user, mark_user_verified
from db.repos.wallet_signatures_repo import get_signature, upsert_signature
from db.utils.time import utcnow

logger = logging.getLogger(__name__)


class InvalidSignatureError(Exception):
    pass


def build_verification_message(wallet_address: str, timestamp: datetime | None = None) -> str:
    ts = (timestamp or utcnow()).isoformat()
    return (
        "Welcome to LucraAI!\n\n"
        "Please sign this message to verify your wallet ownership and enable secure transactions.\n\n"
        "This signature will not trigger a blockchain transaction or cost any gas fees.\n\n"
        f"Wallet: {wallet_address}\n"
        f"Timestamp: {ts}"
    )


def recover_signer(message: str, signature: str) -> str:
    try:
        return Account.recover_message(encode_defunct(text=message), signature=signature)
    except Exception as exc:
        raise InvalidSignatureError(f"signature could not be recovered: {exc}") from exc


def verify_wallet_signature(wallet_address: str, message: str, signature: str) -> bool:
    if not Web3.is_address(wallet_address):
        return False
    try:
        signer = recover_signer(message, signature)
    except InvalidSignatureError as exc:
        logger.info("wallet verification failed wallet=%s: %s", wallet_address, exc)
        return False
    return signer.lower() == wallet_address.lower()


def verify_and_store(
    db: Session,
    *,
    wallet_address: str,
    message: str,
    signature: str,
    wallet_type: str = "wagmi",
) -> User:
    """
    Checks the signature, stores it and flags the user verified.
    Raises InvalidSignatureError when the signer is not the wallet.
    """
    if not verify_wallet_signature(wallet_address, message, signature):
        raise InvalidSignatureError("signature does not match wallet address")

    ensure_user(db, wallet_address=wallet_address, wallet_type=wallet_type)
    upsert_signature(db, wallet_address=wallet_address, signature=signature, message=message)
    return mark_user_verified(db, wallet_address=wallet_address)


def is_wallet_verified(db: Session, wallet_address: str) -> bool:
    return get_signature(db, wallet_address) is not None
