from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from app.chat.contracts import ActionIntent, HistoryType
from app.chat.fallback_parser import parse_message
from app.chat.responses import (
    balance_reply,
    balance_wallet_type,
    connect_wallet_reply,
    history_reply,
    history_type_for,
    send_reply,
    split_reply,
)


def test_send_reply_lists_recipients():
    reply = send_reply(parse_message("Send 50 ETH to @alice.base and @bob"))
    assert reply == (
        "🤖 I've prepared a transaction to send 50 ETH to @alice.base and @bob. "
        "Would you like to confirm this transaction?"
    )


def test_send_reply_without_recipient():
    reply = send_reply(ActionIntent(intent="send", amount=Decimal("1.5")))
    assert "send 1.5 ETH to the recipient." in reply


def test_split_reply_equal_with_note():
    reply = split_reply(parse_message("Split 100 equally between @bob and @charlie for dinner"))
    assert reply == "🤖 I'll split 100 ETH equally between @bob and @charlie for dinner. Is this correct?"


def test_split_reply_note_already_prefixed():
    reply = split_reply(ActionIntent(intent="split", amount=10, recipients=["a"], note="for taxi"))
    assert "as specified between @a for taxi." in reply


def test_balance_sentinel_wallet_types():
    assert balance_wallet_type("check my smart wallet balance") == "smart"
    assert balance_wallet_type("balance of my connected wallet") == "main"
    assert balance_wallet_type("check balance") == "both"
    assert balance_reply(parse_message("check balance")) == "🤖 __FETCH_BALANCE__:both__"


def test_history_type_resolution():
    assert history_type_for(ActionIntent(intent="transaction_history")) == HistoryType.TRANSACTIONS
    assert history_type_for(ActionIntent(intent="chat_history")) == HistoryType.CHAT
    assert history_type_for(ActionIntent(intent="history")) == HistoryType.ALL
    assert history_type_for(ActionIntent(intent="history", history_type="chat")) == HistoryType.CHAT


def test_transaction_history_summary():
    rows = [
        {"transaction_type": "send", "amount": Decimal("1.25"), "token": "ETH", "created_at": datetime(2026, 3, 2)},
        {"transaction_type": "split", "amount": Decimal("2"), "token": "ETH", "created_at": datetime(2026, 3, 1)},
    ]
    reply = history_reply(HistoryType.TRANSACTIONS, rows)
    assert "You've made 2 transactions" in reply
    assert "2026-03-02" in reply
    assert "3.25 ETH" in reply


def test_empty_histories():
    assert "don't have any transaction history" in history_reply(HistoryType.TRANSACTIONS, [])
    assert "don't have any chat history" in history_reply(HistoryType.CHAT, [])
    assert "don't have any history" in history_reply(HistoryType.ALL, [])


def test_mixed_history_counts():
    rows = [
        {"transaction_type": "send", "created_at": datetime(2026, 1, 2)},
        {"is_user": True, "created_at": datetime(2026, 1, 1)},
        {"is_user": False, "created_at": datetime(2026, 1, 1)},
    ]
    assert history_reply(HistoryType.ALL, rows) == (
        "🤖 I found 3 items in your history: 1 transactions and 2 chat messages."
    )


def test_connect_wallet_reply():
    assert connect_wallet_reply(HistoryType.TRANSACTIONS) == (
        "🤖 Please connect your wallet to view your transaction history."
    )
    assert connect_wallet_reply(HistoryType.ALL) == "🤖 Please connect your wallet to view your history."
