"""Registration and sign-in routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..clients import GoogleTokenVerifier
from ..config import Settings, get_settings
from ..db import get_db
from ..dependencies import get_google_verifier
from ..schemas import (
    GoogleLoginRequest,
    GoogleLoginResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    UserOut,
)
from ..services import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return AccountService(db, settings).register(
        username=body.username, email=str(body.email), password=body.password
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    token, user = AccountService(db, settings).login(email=body.email, password=body.password)
    return LoginResponse(token=token, user=UserOut.model_validate(user))


@router.post("/google", response_model=GoogleLoginResponse)
def google_login(
    body: GoogleLoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    verifier: GoogleTokenVerifier = Depends(get_google_verifier),
) -> GoogleLoginResponse:
    token, user = AccountService(db, settings).google_login(body.token, verifier)
    return GoogleLoginResponse(access_token=token, user=UserOut.model_validate(user))
