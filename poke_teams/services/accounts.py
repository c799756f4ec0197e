"""Registration, password login and Google sign-in."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Tuple

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..clients import GoogleAuthError, GoogleTokenVerifier
from ..config import Settings
from ..db import User
from ..errors import BadRequestError, UnauthorizedError
from ..security import hash_password, random_password_hash, sign_token, verify_password

logger = logging.getLogger(__name__)

USERNAME_MIN = 3
USERNAME_MAX = 30


def normalize_email(email: str) -> str:
    """Canonical form stored on users: the domain is lowercased, the local part kept."""

    try:
        return validate_email(email.strip(), check_deliverability=False).normalized
    except EmailNotValidError:
        return email.strip()


def token_claims(user: User) -> Dict[str, Any]:
    return {"id": user.id, "role": user.role}


class AccountService:
    def __init__(self, db: Session, settings: Settings) -> None:
        self.db = db
        self.settings = settings

    def register(self, *, username: str, email: str, password: str) -> User:
        email = normalize_email(email)
        if self._exists(User.username == username):
            raise BadRequestError("Username must be unique")
        if self._exists(User.email == email):
            raise BadRequestError("Email must be unique")

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role="trainer",
        )
        self.db.add(user)
        self.db.commit()
        logger.info("Registered user %s", user.id)
        return user

    def login(self, *, email: str, password: str) -> Tuple[str, User]:
        email = normalize_email(email)
        user = self.db.scalars(select(User).where(User.email == email)).first()
        # Same error whether the account is missing or the password is wrong.
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise UnauthorizedError("Invalid credentials")
        return sign_token(token_claims(user), self.settings), user

    def google_login(self, id_token: str, verifier: GoogleTokenVerifier) -> Tuple[str, User]:
        try:
            identity = verifier.verify(id_token)
        except GoogleAuthError as exc:
            logger.info("Google token rejected: %s", exc)
            raise BadRequestError("Google authentication failed") from exc

        email = normalize_email(identity.email)
        user = self.db.scalars(select(User).where(User.email == email)).first()
        if user is None:
            user = User(
                username=self._unique_username(identity.name or email.split("@")[0]),
                email=email,
                password_hash=random_password_hash(),
                google_id=identity.subject or None,
                role="trainer",
            )
            self.db.add(user)
            self.db.commit()
            logger.info("Created user %s from Google sign-in", user.id)
        elif not user.google_id and identity.subject:
            user.google_id = identity.subject
            self.db.commit()

        return sign_token(token_claims(user), self.settings), user

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _exists(self, clause) -> bool:
        return self.db.scalars(select(User.id).where(clause).limit(1)).first() is not None

    def _unique_username(self, display_name: str) -> str:
        base = re.sub(r"\s+", " ", display_name).strip()[:USERNAME_MAX]
        if len(base) < USERNAME_MIN:
            base = (base + "trainer")[:USERNAME_MAX]
        candidate = base
        suffix = 1
        while self._exists(User.username == candidate):
            tag = str(suffix)
            candidate = f"{base[: USERNAME_MAX - len(tag)]}{tag}"
            suffix += 1
        return candidate
