"""Authenticated AI assistant routes."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_user, get_gemini_client
from ..llm import GeminiClient
from ..models import CurrentUser
from ..schemas import AnalyzeResponse, RecommendRequest, RecommendResponse
from ..services import AIAssistant

router = APIRouter(prefix="/ai", tags=["ai"], dependencies=[Depends(get_current_user)])


@router.post("/recommend", response_model=RecommendResponse)
def recommend(
    body: RecommendRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    gemini: Optional[GeminiClient] = Depends(get_gemini_client),
) -> RecommendResponse:
    """Ask Gemini for up to six Pokemon matching the prompt and preferences."""
    report = AIAssistant(db, gemini).recommend(
        body.prompt,
        preferences=body.preferences.model_dump(by_alias=True),
        current_team=[member.name for member in body.current_team],
    )
    return RecommendResponse.model_validate(asdict(report))


@router.post("/analyze/{team_id}", response_model=AnalyzeResponse)
def analyze(
    team_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    gemini: Optional[GeminiClient] = Depends(get_gemini_client),
) -> AnalyzeResponse:
    report = AIAssistant(db, gemini).analyze(team_id, user.id)
    return AnalyzeResponse.model_validate(asdict(report))
