from __future__ import annotations

WALLET = "0x2222222222222222222222222222222222222222"


def test_ensure_creates_then_returns_existing(client):
    first = client.post("/v1/users/ensure", json={"walletAddress": WALLET})
    assert first.status_code == 201
    body = first.json()
    assert body["message"] == "User created successfully"
    assert body["user"]["wallet_address"] == WALLET
    assert body["user"]["wallet_type"] == "wagmi"
    assert body["user"]["is_verified"] is False

    second = client.post("/v1/users/ensure", json={"walletAddress": WALLET.upper().replace("0X", "0x")})
    assert second.status_code == 200
    assert second.json()["message"] == "User already exists"
    assert second.json()["user"]["id"] == body["user"]["id"]


def test_ensure_requires_wallet(client):
    resp = client.post("/v1/users/ensure", json={})
    assert resp.status_code == 400
    assert resp.json()["success"] is False


def test_get_user(client):
    assert client.get("/v1/users/get", params={"walletAddress": WALLET}).json() is None

    client.post("/v1/users/ensure", json={"walletAddress": WALLET, "walletType": "coinbase"})
    resp = client.get("/v1/users/get", params={"walletAddress": WALLET})
    assert resp.status_code == 200
    assert resp.json()["wallet_type"] == "coinbase"


def test_get_user_missing_wallet(client):
    resp = client.get("/v1/users/get")
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Missing wallet address"}


def test_store_updates_wallet_type(client):
    created = client.post("/v1/users/store", json={"walletAddress": WALLET})
    assert created.status_code == 200
    assert created.json()["wallet_type"] == "unknown"

    updated = client.post("/v1/users/store", json={"walletAddress": WALLET, "walletType": "metamask"})
    assert updated.json()["id"] == created.json()["id"]
    assert updated.json()["wallet_type"] == "metamask"
