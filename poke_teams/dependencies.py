"""FastAPI dependencies shared across routers."""

from __future__ import annotations

import logging
from typing import Optional

import jwt
from fastapi import Depends, Header, Request

from .clients import GoogleTokenVerifier
from .config import Settings, get_settings
from .errors import UnauthorizedError
from .llm import GeminiClient
from .models import CurrentUser
from .security import verify_token

logger = logging.getLogger(__name__)


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """Gate protected routes on a valid bearer token and expose its claims."""

    if not authorization:
        raise UnauthorizedError("Authentication required")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError("Invalid token")

    claims = verify_token(token, settings)
    user_id = claims.get("id")
    if not isinstance(user_id, int):
        raise jwt.InvalidTokenError("Token is missing the user id claim")
    return CurrentUser(id=user_id, role=str(claims.get("role") or "trainer"))


def get_gemini_client(
    request: Request, settings: Settings = Depends(get_settings)
) -> Optional[GeminiClient]:
    """Return a Gemini client, or None when the API key is missing or setup fails."""

    cached = getattr(request.app.state, "gemini_client", None)
    if cached is not None:
        return cached
    try:
        client = GeminiClient(api_key=settings.gemini_api_key, model=settings.gemini_model)
    except Exception as exc:
        logger.warning("Gemini client unavailable: %s", exc)
        return None
    request.app.state.gemini_client = client
    return client


def get_google_verifier(settings: Settings = Depends(get_settings)) -> GoogleTokenVerifier:
    return GoogleTokenVerifier(client_id=settings.google_client_id)
