"""Pydantic request and response models for the REST API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str


# ----------------------------------------------------------------------
# Catalog
# ----------------------------------------------------------------------
class PokemonOut(CamelModel):
    id: int
    poke_api_id: int
    name: str
    types: List[str] = Field(default_factory=list)
    sprite: Optional[str] = None
    height: Optional[int] = None
    weight: Optional[int] = None
    base_stats: Dict[str, int] = Field(default_factory=dict)
    abilities: List[str] = Field(default_factory=list)
    moves: List[str] = Field(default_factory=list)
    moves_detail: List[Dict[str, Any]] = Field(default_factory=list)
    order: Optional[int] = None
    base_experience: Optional[int] = None
    is_default: Optional[bool] = None
    forms: List[str] = Field(default_factory=list)
    flavor_text_entries: List[Dict[str, Any]] = Field(default_factory=list)
    evolution_chain: Optional[Dict[str, Any]] = None
    habitat: Optional[str] = None
    generation: Optional[str] = None
    capture_rate: Optional[int] = None
    growth_rate: Optional[str] = None
    ev_yield: Dict[str, int] = Field(default_factory=dict)
    base_happiness: Optional[int] = None
    egg_groups: List[str] = Field(default_factory=list)
    egg_cycle: Optional[int] = None
    gender_ratio: Optional[Dict[str, float]] = None
    type_effectiveness: Optional[Dict[str, List[str]]] = None


class MoveOut(BaseModel):
    """Move lookup reply; `type` is the elemental type, `category` the damage class."""

    name: str
    type: Optional[str] = None
    category: Optional[str] = None
    power: Optional[int] = None
    accuracy: Optional[int] = None
    pp: Optional[int] = None
    description: Optional[str] = None


# ----------------------------------------------------------------------
# Auth
# ----------------------------------------------------------------------
class RegisterRequest(BaseModel):
    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def _username_length(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Username cannot be empty")
        if not 3 <= len(value) <= 30:
            raise ValueError("Username must be between 3 and 30 characters")
        return value

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if not value:
            raise ValueError("Password cannot be empty")
        if len(value) < 6:
            raise ValueError("Password must be at least 6 characters")
        if len(value) > 100:
            raise ValueError("Password must be at most 100 characters")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str


class GoogleLoginRequest(BaseModel):
    token: str


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


class LoginResponse(BaseModel):
    token: str
    user: UserOut


class GoogleLoginResponse(BaseModel):
    success: bool = True
    access_token: str
    user: UserOut


# ----------------------------------------------------------------------
# Teams
# ----------------------------------------------------------------------
class TeamCreateRequest(BaseModel):
    name: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def _name_present(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("Team name is required")
        if not value.strip():
            raise ValueError("Team name cannot be empty")
        return value.strip()


class TeamUpdateRequest(CamelModel):
    name: Optional[str] = None
    pokemon_ids: Optional[List[int]] = None


class AddPokemonRequest(CamelModel):
    pokemon_id: Optional[int] = Field(default=None, validate_default=True)

    @field_validator("pokemon_id")
    @classmethod
    def _pokemon_id_present(cls, value: Optional[int]) -> int:
        if not value:
            raise ValueError("pokemonId is required.")
        return value


class EditPokemonRequest(BaseModel):
    moves: Optional[Union[List[str], str]] = None
    ability: Optional[str] = None
    nature: Optional[str] = None


class RosterEntryOut(CamelModel):
    id: int
    slot: int
    moves: Optional[List[str]] = None
    ability: Optional[str] = None
    nature: Optional[str] = None
    pokemon: PokemonOut


class TeamOut(CamelModel):
    id: int
    name: str
    user_id: int
    roster: List[RosterEntryOut] = Field(default_factory=list)


class AddedPokemonOut(CamelModel):
    id: int
    team_id: int
    pokemon_id: int
    slot: int
    name: str
    moves: Optional[List[str]] = None
    ability: Optional[str] = None
    nature: Optional[str] = None


class AddPokemonResponse(BaseModel):
    team: TeamOut
    pokemon: AddedPokemonOut


# ----------------------------------------------------------------------
# AI assistant
# ----------------------------------------------------------------------
class RecommendationPreferences(CamelModel):
    types: Optional[List[str]] = None
    generation: Optional[str] = None
    battle_format: Optional[str] = None


class CurrentTeamMember(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str


class RecommendRequest(CamelModel):
    prompt: Optional[str] = Field(default=None, validate_default=True)
    preferences: RecommendationPreferences = Field(default_factory=RecommendationPreferences)
    current_team: List[CurrentTeamMember] = Field(default_factory=list)

    @field_validator("prompt")
    @classmethod
    def _prompt_present(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("Prompt is required")
        return value

    @field_validator("preferences", mode="before")
    @classmethod
    def _default_preferences(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("current_team", mode="before")
    @classmethod
    def _default_current_team(cls, value: Any) -> Any:
        return [] if value is None else value


class RecommendedPokemonOut(CamelModel):
    name: str
    sprite: str
    types: List[str] = Field(default_factory=list)
    role: Optional[str] = None
    reason: Optional[str] = None
    pokemon: Dict[str, Any] = Field(default_factory=dict)


class RecommendationAnalysisOut(CamelModel):
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class RecommendResponse(CamelModel):
    success: bool = True
    prompt: str
    recommended_pokemon: List[RecommendedPokemonOut] = Field(default_factory=list)
    summary: str
    analysis: RecommendationAnalysisOut
    raw_response: str = ""


class TypeCoverageOut(CamelModel):
    strong: List[str] = Field(default_factory=list)
    weak: List[str] = Field(default_factory=list)


class TeamAnalysisOut(CamelModel):
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    type_coverage: TypeCoverageOut = Field(default_factory=TypeCoverageOut)
    strategy: Optional[str] = None
    overall_rating: Optional[str] = None


class CurrentPokemonOut(CamelModel):
    name: str
    sprite: str
    types: List[str] = Field(default_factory=list)


class AnalyzeResponse(CamelModel):
    success: bool = True
    team_name: str
    current_pokemon: List[CurrentPokemonOut] = Field(default_factory=list)
    analysis: TeamAnalysisOut
    raw_response: str = ""
