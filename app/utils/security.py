# app/utils/security.py
"""
Password hashing and JWT bearer tokens.

Hashes are stored as "pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>" so the
iteration count can be raised later without invalidating existing players.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

import jwt

from app.config import settings

_HASH_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, iterations: int = None) -> str:
    iterations = iterations or settings.PASSWORD_HASH_ITERATIONS
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_HASH_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        scheme, iterations, salt_hex, digest_hex = stored.split("$")
    except (AttributeError, ValueError):
        return False
    if scheme != _HASH_SCHEME:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt_hex), int(iterations)
    )
    return hmac.compare_digest(digest.hex(), digest_hex)


def create_access_token(player_id: int, username: str, expires_minutes: int = None) -> str:
    """Issue a signed bearer token carrying the player's numeric id."""
    now = datetime.now(timezone.utc)
    expires = now + timedelta(minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    payload = {"sub": username, "player_id": player_id, "iat": now, "exp": expires}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Return the token claims. Raises jwt.InvalidTokenError on any failure."""
    claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    if not isinstance(claims.get("player_id"), int):
        raise jwt.InvalidTokenError("player_id claim missing")
    return claims
