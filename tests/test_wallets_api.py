from __future__ import annotations

import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from app.services.wallet_verification import build_verification_message, verify_wallet_signature


@pytest.fixture
def account():
    return Account.create()


def _sign(account, message: str) -> str:
    signed = Account.sign_message(encode_defunct(text=message), private_key=account.key)
    return "0x" + bytes(signed.signature).hex()


def test_verification_message_mentions_wallet(client, account):
    resp = client.get("/v1/wallets/verification-message", params={"walletAddress": account.address})
    assert resp.status_code == 200
    message = resp.json()["message"]
    assert message.startswith("Welcome to LucraAI!")
    assert f"Wallet: {account.address}" in message


def test_verification_message_rejects_bad_address(client):
    resp = client.get("/v1/wallets/verification-message", params={"walletAddress": "0x123"})
    assert resp.status_code == 400


def test_verify_signature_roundtrip(account):
    message = build_verification_message(account.address)
    signature = _sign(account, message)
    assert verify_wallet_signature(account.address, message, signature) is True
    assert verify_wallet_signature(account.address, message + "tampered", signature) is False
    assert verify_wallet_signature(account.address, message, "0xdeadbeef") is False


def test_verify_endpoint_marks_user_verified(client, account):
    message = build_verification_message(account.address)
    resp = client.post(
        "/v1/wallets/verify",
        json={"walletAddress": account.address, "message": message, "signature": _sign(account, message)},
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "verified": True}

    status = client.get("/v1/wallets/verification", params={"walletAddress": account.address})
    assert status.json()["verified"] is True

    user = client.get("/v1/users/get", params={"walletAddress": account.address}).json()
    assert user["is_verified"] is True


def test_verify_endpoint_rejects_foreign_signature(client, account):
    other = Account.create()
    message = build_verification_message(account.address)
    resp = client.post(
        "/v1/wallets/verify",
        json={"walletAddress": account.address, "message": message, "signature": _sign(other, message)},
    )
    assert resp.status_code == 400
    assert resp.json()["success"] is False

    status = client.get("/v1/wallets/verification", params={"walletAddress": account.address})
    assert status.json()["verified"] is False
