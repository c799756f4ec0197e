"""Password hashing and bearer-token helpers."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from .config import Settings


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    return check_password_hash(password_hash, password)


def random_password_hash() -> str:
    """Hash of a throwaway secret for accounts that only sign in through Google."""

    return hash_password(secrets.token_urlsafe(32))


def sign_token(claims: Dict[str, Any], settings: Settings) -> str:
    payload = dict(claims)
    now = datetime.now(timezone.utc)
    payload["iat"] = now
    if settings.jwt_expires_minutes > 0:
        payload["exp"] = now + timedelta(minutes=settings.jwt_expires_minutes)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Decode and validate a token; raises ``jwt.PyJWTError`` subclasses on failure."""

    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
