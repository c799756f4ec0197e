"""Verification of Google Sign-In ID tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from google.auth.transport import requests as google_requests
from google.oauth2 import id_token


class GoogleAuthError(RuntimeError):
    """Raised when a Google ID token cannot be verified."""


@dataclass(slots=True, frozen=True)
class GoogleIdentity:
    subject: str
    email: str
    name: Optional[str] = None


class GoogleTokenVerifier:
    """Checks ID tokens against Google's certificates for our OAuth client id."""

    def __init__(self, *, client_id: Optional[str], request: Optional[Any] = None) -> None:
        self.client_id = client_id
        self._request = request

    def verify(self, token: str) -> GoogleIdentity:
        if not self.client_id:
            raise GoogleAuthError("GOOGLE_CLIENT_ID is not configured")
        try:
            payload: Dict[str, Any] = id_token.verify_oauth2_token(
                token,
                self._request or google_requests.Request(),
                self.client_id,
            )
        except ValueError as exc:
            raise GoogleAuthError(str(exc)) from exc

        email = payload.get("email")
        if not email:
            raise GoogleAuthError("Google token has no email claim")
        return GoogleIdentity(
            subject=str(payload.get("sub", "")),
            email=email,
            name=payload.get("name"),
        )
