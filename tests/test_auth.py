# tests/test_auth.py
"""Signup, login, bearer-token checks, and password hashing."""

import jwt
from app.utils.security import create_access_token, decode_access_token, hash_password, verify_password
from conftest import auth_headers


class TestPasswords:
    def test_hash_roundtrip(self):
        stored = hash_password("hunter22", iterations=1000)
        assert stored.startswith("pbkdf2_sha256$1000$")
        assert verify_password("hunter22", stored)
        assert not verify_password("hunter23", stored)

    def test_same_password_gets_different_salt(self):
        assert hash_password("abcdef", iterations=1000) != hash_password("abcdef", iterations=1000)

    def test_garbage_hash_never_verifies(self):
        assert not verify_password("x", "not-a-hash")
        assert not verify_password("x", "md5$1$00$00")


class TestTokens:
    def test_claims(self):
        claims = decode_access_token(create_access_token(7, "rider"))
        assert claims["player_id"] == 7
        assert claims["sub"] == "rider"


class TestSignupLogin:
    def test_signup_returns_token_and_starting_balance(self, client):
        resp = client.post("/api/auth/signup", json={"username": "new_driver", "password": "secret1",
                                                     "email": "d@example.com"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["username"] == "new_driver"

        balance = client.get(f"/api/player/{data['player_id']}/balance",
                             headers={"Authorization": f"Bearer {data['token']}"})
        assert balance.status_code == 200
        assert balance.json()["bank_balance"] == 10000.0

    def test_duplicate_username_is_400(self, client, make_player):
        make_player("taken")
        resp = client.post("/api/auth/signup", json={"username": "taken", "password": "secret1"})
        assert resp.status_code == 400
        assert "already taken" in resp.json()["detail"]

    def test_short_password_is_400(self, client):
        resp = client.post("/api/auth/signup", json={"username": "shorty", "password": "123"})
        assert resp.status_code == 400

    def test_login(self, client, make_player):
        pid = make_player("rider", password="secret1")
        resp = client.post("/api/auth/login", json={"username": "rider", "password": "secret1"})
        assert resp.status_code == 200
        assert resp.json()["player_id"] == pid

    def test_login_wrong_password_is_401(self, client, make_player):
        make_player("rider", password="secret1")
        resp = client.post("/api/auth/login", json={"username": "rider", "password": "nope"})
        assert resp.status_code == 401


class TestBearerGuard:
    def test_missing_token_is_401(self, client, make_player):
        pid = make_player()
        assert client.get(f"/api/player/{pid}").status_code == 401

    def test_expired_token_is_403(self, client, make_player):
        pid = make_player()
        token = create_access_token(pid, "rider", expires_minutes=-5)
        resp = client.get(f"/api/player/{pid}", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 403
        assert resp.json()["detail"] == "Invalid token"

    def test_foreign_signature_is_403(self, client, make_player):
        pid = make_player()
        token = jwt.encode({"player_id": pid}, "someone-elses-secret", algorithm="HS256")
        resp = client.get(f"/api/player/{pid}", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 403

    def test_player_details(self, client, make_player):
        pid = make_player("rider", balance="1234.50")
        resp = client.get(f"/api/player/{pid}", headers=auth_headers(pid))
        assert resp.status_code == 200
        assert resp.json()["bank_balance"] == 1234.5
        assert resp.json()["username"] == "rider"
