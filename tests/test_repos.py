from __future__ import annotations

from decimal import Decimal

import pytest

from db.models import User
from db.repos.conversations_repo import (
    ConversationNotFoundError,
    create_conversation,
    list_conversations_for_user,
    rename_conversation,
    truncate_title,
)
from db.repos.transactions_repo import create_transaction, get_transaction
from db.repos.users_repo import UserNotFoundError, ensure_user, get_user_by_wallet, mark_user_verified
from db.utils import amount_in_range

WALLET = "0x8888888888888888888888888888888888888888"


def test_truncate_title():
    assert truncate_title("short") == "short"
    assert truncate_title("a  b\n c") == "a b c"
    assert truncate_title("y" * 51) == "y" * 50 + "..."
    assert truncate_title("y" * 50) == "y" * 50
    assert truncate_title("abcdef", max_len=3) == "abc..."


def test_ensure_user_is_idempotent(db):
    user, created = ensure_user(db, wallet_address=WALLET)
    again, created_again = ensure_user(db, wallet_address=" " + WALLET + " ")
    assert created is True
    assert created_again is False
    assert again.id == user.id
    assert db.query(User).count() == 1


def test_lookup_prefers_oldest_duplicate(db):
    first = User(wallet_address=WALLET, wallet_type="wagmi", is_verified=False)
    db.add(first)
    db.commit()
    db.add(User(wallet_address=WALLET, wallet_type="other", is_verified=False))
    db.commit()
    assert get_user_by_wallet(db, WALLET).id == first.id


def test_mark_verified_unknown_wallet(db):
    with pytest.raises(UserNotFoundError):
        mark_user_verified(db, wallet_address=WALLET)


def test_conversations_ordered_by_recent_activity(db):
    user, _ = ensure_user(db, wallet_address=WALLET)
    older = create_conversation(db, user_id=user.id, title="older")
    newer = create_conversation(db, user_id=user.id, title="newer")
    rename_conversation(db, conversation_id=older.id, title="renamed")

    ids = [c.id for c in list_conversations_for_user(db, user_id=user.id)]
    assert ids == [older.id, newer.id]


def test_rename_unknown_conversation(db):
    with pytest.raises(ConversationNotFoundError):
        rename_conversation(db, conversation_id=123456, title="x")


def test_amounts_keep_wei_precision(db):
    user, _ = ensure_user(db, wallet_address=WALLET)
    tx = create_transaction(
        db,
        user_id=user.id,
        transaction_type="send",
        amount=Decimal("1.000000000000000001"),
        recipient_address="bob",
    )
    db.expire_all()
    assert get_transaction(db, tx.id).amount == Decimal("1.000000000000000001")


def test_amount_range_matches_numeric_column():
    assert amount_in_range(Decimal("99999999999999999999.999999999999999999"))
    assert not amount_in_range(Decimal(10) ** 20)
    assert not amount_in_range(-(Decimal(10) ** 20))
