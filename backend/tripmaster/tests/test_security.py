"""
Tests for password hashing and token verification.
"""
from datetime import timedelta

from jose import jwt

from tripmaster.core.config import settings
from tripmaster.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = get_password_hash("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)
    assert not verify_password("", hashed)
    assert not verify_password("correct horse", "not-a-bcrypt-hash")


def test_long_passwords_are_distinguished():
    base = "x" * 100
    hashed = get_password_hash(base + "a")
    assert not verify_password(base + "b", hashed)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"userId": 1, "username": "alice"}, "other-secret", algorithm="HS256")
    assert decode_access_token(token) is None


def test_expired_token_accepted_unless_enforced(monkeypatch):
    token = create_access_token(
        {"userId": 1, "username": "alice"}, expires_delta=timedelta(days=-1)
    )
    assert decode_access_token(token)["userId"] == 1
    assert decode_access_token(token, enforce_expiry=True) is None

    monkeypatch.setattr(settings, "ENFORCE_TOKEN_EXPIRY", True)
    assert decode_access_token(token) is None


def test_expired_token_on_protected_route(client, register, monkeypatch):
    user = register("alice")["user"]
    token = create_access_token(
        {"userId": user["id"], "username": "alice"}, expires_delta=timedelta(days=-30)
    )
    headers = {"Authorization": f"Bearer {token}"}

    assert client.get("/api/auth/me", headers=headers).status_code == 200

    monkeypatch.setattr(settings, "ENFORCE_TOKEN_EXPIRY", True)
    assert client.get("/api/auth/me", headers=headers).status_code == 403


def test_token_without_user_id_is_forbidden(client):
    token = create_access_token({"username": "ghost"})
    response = client.get("/api/memos", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
