"""Team recommendations and team analysis backed by Gemini."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import Pokemon, Team
from ..errors import AIServiceError, AppError, BadRequestError
from ..llm import GeminiClient
from ..models import (
    CurrentPokemon,
    RecommendationAnalysis,
    RecommendationReport,
    RecommendedPokemon,
    TeamAnalysis,
    TeamAnalysisReport,
    TypeCoverage,
)
from .catalog import sprite_url
from .teams import TeamService

logger = logging.getLogger(__name__)

CATALOG_SAMPLE_SIZE = 50
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the brace-delimited object embedded in a model reply, if any."""

    match = _JSON_OBJECT.search(text or "")
    if not match:
        return None
    try:
        payload = json.loads(match.group(0))
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class AIAssistant:
    """Coordinates catalog grounding, a single Gemini call and reply reshaping."""

    def __init__(self, db: Session, gemini_client: Optional[GeminiClient]) -> None:
        self.db = db
        self.gemini = gemini_client

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------
    def recommend(
        self,
        prompt: str,
        *,
        preferences: Optional[Dict[str, Any]] = None,
        current_team: Sequence[str] = (),
    ) -> RecommendationReport:
        preferences = preferences or {}
        try:
            catalog = list(self.db.scalars(select(Pokemon).order_by(Pokemon.poke_api_id)))
            instruction = self._build_recommend_prompt(prompt, preferences, current_team, catalog)
            text = self._generate(instruction)
        except AppError:
            raise
        except Exception as exc:
            logger.error("Recommendation request failed: %s", exc)
            raise AIServiceError() from exc

        parsed = extract_json_object(text)
        if parsed is None:
            logger.warning("Gemini recommendation reply was not JSON; returning raw text")
            return RecommendationReport(
                prompt=prompt,
                summary=text,
                analysis=RecommendationAnalysis(
                    strengths=["Please refer to the detailed explanation above"],
                    weaknesses=["Analysis could not be parsed properly"],
                    suggestions=["Try rephrasing your request"],
                ),
                recommended_pokemon=[],
                raw_response=text,
            )

        by_name = {p.name.lower(): p for p in catalog}
        recommended: List[RecommendedPokemon] = []
        for rec in parsed.get("recommendedPokemon") or []:
            if not isinstance(rec, dict) or not rec.get("name"):
                continue
            pokemon = by_name.get(str(rec["name"]).lower())
            if pokemon is None:
                logger.debug("Dropping unknown recommendation %r", rec["name"])
                continue
            recommended.append(
                RecommendedPokemon(
                    name=pokemon.name,
                    sprite=sprite_url(pokemon),
                    types=list(pokemon.types or []),
                    role=_optional_str(rec.get("role")),
                    reason=_optional_str(rec.get("reason")),
                    pokemon={
                        "id": pokemon.id,
                        "name": pokemon.name,
                        "pokeApiId": pokemon.poke_api_id,
                        "types": list(pokemon.types or []),
                        "baseStats": dict(pokemon.base_stats or {}),
                        "abilities": list(pokemon.abilities or []),
                    },
                )
            )

        analysis = parsed.get("analysis")
        if isinstance(analysis, dict):
            report_analysis = RecommendationAnalysis(
                strengths=_str_list(analysis.get("strengths")),
                weaknesses=_str_list(analysis.get("weaknesses")),
                suggestions=_str_list(analysis.get("suggestions")),
            )
        else:
            report_analysis = RecommendationAnalysis(
                strengths=["Balanced team composition"],
                weaknesses=["Analysis pending"],
                suggestions=["Consider training and movesets"],
            )

        return RecommendationReport(
            prompt=prompt,
            summary=_optional_str(parsed.get("summary")) or "Team recommendation generated successfully",
            analysis=report_analysis,
            recommended_pokemon=recommended,
            raw_response=text,
        )

    # ------------------------------------------------------------------
    # Team analysis
    # ------------------------------------------------------------------
    def analyze(self, team_id: int, owner_id: int) -> TeamAnalysisReport:
        team = TeamService(self.db).get(team_id, owner_id)
        if not team.roster:
            raise BadRequestError("Team is empty")

        try:
            text = self._generate(self._build_analysis_prompt(team))
        except AppError:
            raise
        except Exception as exc:
            logger.error("Team analysis request failed: %s", exc)
            raise AIServiceError() from exc

        parsed = extract_json_object(text)
        if parsed is None:
            logger.warning("Gemini analysis reply for team %s was not JSON", team.id)
            analysis = TeamAnalysis(
                overall_rating="N/A",
                strengths=["Analysis could not be parsed"],
                weaknesses=["Please try again"],
                suggestions=["Refer to the detailed explanation"],
                type_coverage=TypeCoverage(),
                strategy=text,
            )
        else:
            coverage = parsed.get("typeCoverage")
            coverage = coverage if isinstance(coverage, dict) else {}
            analysis = TeamAnalysis(
                overall_rating=_optional_str(parsed.get("overallRating")),
                strengths=_str_list(parsed.get("strengths")),
                weaknesses=_str_list(parsed.get("weaknesses")),
                suggestions=_str_list(parsed.get("suggestions")),
                type_coverage=TypeCoverage(
                    strong=_str_list(coverage.get("strong")),
                    weak=_str_list(coverage.get("weak")),
                ),
                strategy=_optional_str(parsed.get("strategy")),
            )

        return TeamAnalysisReport(
            team_name=team.name,
            current_pokemon=[
                CurrentPokemon(
                    name=entry.pokemon.name,
                    sprite=sprite_url(entry.pokemon),
                    types=list(entry.pokemon.types or []),
                )
                for entry in team.roster
            ],
            analysis=analysis,
            raw_response=text,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _generate(self, prompt: str) -> str:
        if self.gemini is None:
            raise AIServiceError()
        logger.debug("Invoking Gemini (%d prompt chars)", len(prompt))
        return self.gemini.generate(prompt)

    def _build_recommend_prompt(
        self,
        prompt: str,
        preferences: Dict[str, Any],
        current_team: Sequence[str],
        catalog: Sequence[Pokemon],
    ) -> str:
        preferred_types = preferences.get("types")
        sample = ", ".join(
            f"{p.name} ({'/'.join(p.types or [])})" for p in catalog[:CATALOG_SAMPLE_SIZE]
        )
        return f"""
You are a Pokemon team building expert. Based on the user's request and available Pokemon data, recommend a balanced team of up to 6 Pokemon.

User Request: "{prompt}"

User Preferences:
- Preferred Types: {', '.join(preferred_types) if preferred_types else 'Any'}
- Preferred Generation: {preferences.get('generation') or 'Any'}
- Battle Format: {preferences.get('battleFormat') or 'General'}

Current Team: {', '.join(current_team) if current_team else 'Empty'}

Available Pokemon (sample): {sample}...

Please provide a team recommendation with analysis. Format your response as JSON:
{{
  "recommendedPokemon": [
    {{"name": "pokemon_name", "role": "role_description", "reason": "why_chosen"}}
  ],
  "summary": "overall_team_strategy_and_synergy",
  "analysis": {{
    "strengths": ["strength1", "strength2", "strength3"],
    "weaknesses": ["weakness1", "weakness2", "weakness3"],
    "suggestions": ["suggestion1", "suggestion2", "suggestion3"]
  }}
}}

Make sure all Pokemon names exactly match those in the available list.
"""

    def _build_analysis_prompt(self, team: Team) -> str:
        members: List[str] = []
        for index, entry in enumerate(team.roster, start=1):
            pokemon = entry.pokemon
            stats = pokemon.base_stats or {}
            members.append(
                f"{index}. {pokemon.name}\n"
                f"   - Types: {'/'.join(pokemon.types or [])}\n"
                f"   - Base Stats: HP:{stats.get('hp')} ATK:{stats.get('attack')} "
                f"DEF:{stats.get('defense')} SpA:{stats.get('special-attack')} "
                f"SpD:{stats.get('special-defense')} SPD:{stats.get('speed')}\n"
                f"   - Abilities: {', '.join(pokemon.abilities or [])}\n"
                f"   - Current Ability: {entry.ability or 'Not set'}\n"
                f"   - Nature: {entry.nature or 'Not set'}\n"
                f"   - Moves: {', '.join(entry.moves) if entry.moves else 'Not set'}"
            )
        roster = "\n".join(members)
        return f"""
Analyze this Pokemon team and provide comprehensive feedback:

Team Name: {team.name}
Pokemon:
{roster}

Format as JSON:
{{
  "overallRating": "score_out_of_10",
  "strengths": ["strength1", "strength2", "strength3"],
  "weaknesses": ["weakness1", "weakness2", "weakness3"],
  "suggestions": ["suggestion1", "suggestion2", "suggestion3"],
  "typeCoverage": {{"strong": ["types_covered_well"], "weak": ["types_poorly_covered"]}},
  "strategy": "recommended_battle_strategy"
}}
"""
