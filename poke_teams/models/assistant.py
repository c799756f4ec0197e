"""Dataclasses describing AI assistant results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class RecommendedPokemon:
    """A model suggestion matched against the catalog and enriched with its data."""

    name: str
    sprite: str
    types: List[str] = field(default_factory=list)
    role: Optional[str] = None
    reason: Optional[str] = None
    pokemon: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class RecommendationAnalysis:
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)


@dataclass(slots=True)
class RecommendationReport:
    prompt: str
    summary: str
    analysis: RecommendationAnalysis
    recommended_pokemon: List[RecommendedPokemon] = field(default_factory=list)
    raw_response: str = ""
    success: bool = True


@dataclass(slots=True)
class TypeCoverage:
    strong: List[str] = field(default_factory=list)
    weak: List[str] = field(default_factory=list)


@dataclass(slots=True)
class TeamAnalysis:
    overall_rating: Optional[str] = None
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    type_coverage: TypeCoverage = field(default_factory=TypeCoverage)
    strategy: Optional[str] = None


@dataclass(slots=True)
class CurrentPokemon:
    name: str
    sprite: str
    types: List[str] = field(default_factory=list)


@dataclass(slots=True)
class TeamAnalysisReport:
    team_name: str
    analysis: TeamAnalysis
    current_pokemon: List[CurrentPokemon] = field(default_factory=list)
    raw_response: str = ""
    success: bool = True
