# tests/test_auth_routes.py
from tests.helpers import auth, register


def test_register_returns_user_and_token(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "new@example.com", "password": "secret123", "name": "New", "role": "seller", "shopName": "Shop"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["token"]
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["role"] == "seller"
    assert body["user"]["shopName"] == "Shop"
    assert "passwordHash" not in body["user"]
    assert "password" not in body["user"]


def test_register_duplicate_email(client, store):
    register(client, "dup@example.com")

    resp = client.post(
        "/api/auth/register",
        json={"email": "dup@example.com", "password": "secret123", "name": "Again"},
    )

    assert resp.status_code == 400
    assert len(store.get_all_users()) == 1


def test_register_validation_errors_are_400(client, store):
    bad_bodies = [
        {"email": "not-an-email", "password": "secret123", "name": "X"},
        {"email": "short@example.com", "password": "123", "name": "X"},
        {"email": "admin@example.com", "password": "secret123", "name": "X", "role": "admin"},
        {"password": "secret123", "name": "X"},
    ]
    for body in bad_bodies:
        assert client.post("/api/auth/register", json=body).status_code == 400

    assert store.get_all_users() == []


def test_password_is_stored_hashed(client, store):
    register(client, "hash@example.com")

    user = store.get_user_by_email("hash@example.com")
    assert user.password_hash
    assert user.password_hash != "secret123"


def test_login(client):
    register(client, "login@example.com")

    ok = client.post("/api/auth/login", json={"email": "login@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["token"]
    assert ok.json()["user"]["email"] == "login@example.com"

    wrong = client.post("/api/auth/login", json={"email": "login@example.com", "password": "nope123"})
    assert wrong.status_code == 401

    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert unknown.status_code == 401


def test_me_requires_valid_token(client, buyer):
    token, user = buyer

    resp = client.get("/api/auth/me", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["id"] == user["id"]
    assert "passwordHash" not in resp.json()

    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers=auth("garbage")).status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": token}).status_code == 401


def test_token_of_deleted_user_is_rejected(client, store, buyer):
    token, user = buyer
    store.delete_user(user["id"])

    assert client.get("/api/auth/me", headers=auth(token)).status_code == 401


def test_update_profile(client, seller):
    token, _ = seller

    resp = client.patch("/api/auth/me", json={"shopName": "Gadgets"}, headers=auth(token))

    assert resp.status_code == 200
    assert resp.json()["shopName"] == "Gadgets"
    assert resp.json()["name"] == "Seller"


def test_health(client, backend):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "storage": backend}
