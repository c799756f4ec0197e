"""Shared dataclasses passed between services and the HTTP layer."""

from .identity import CurrentUser
from .assistant import (
    CurrentPokemon,
    RecommendationAnalysis,
    RecommendationReport,
    RecommendedPokemon,
    TeamAnalysis,
    TeamAnalysisReport,
    TypeCoverage,
)

__all__ = [
    "CurrentPokemon",
    "CurrentUser",
    "RecommendationAnalysis",
    "RecommendationReport",
    "RecommendedPokemon",
    "TeamAnalysis",
    "TeamAnalysisReport",
    "TypeCoverage",
]
