"""ORM models for users, the Pokemon/move catalog and team rosters."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

MAX_TEAM_SIZE = 6
ROLES = ("trainer", "admin")


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


class User(TimestampMixin, Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN (" + ", ".join(f"'{r}'" for r in ROLES) + ")", name="ck_users_role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    google_id: Mapped[Optional[str]] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="trainer")

    teams: Mapped[List["Team"]] = relationship(back_populates="owner")


class Pokemon(TimestampMixin, Base):
    """Immutable catalog entry populated by the ingestion commands."""

    __tablename__ = "pokemon"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    poke_api_id: Mapped[int] = mapped_column(Integer, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    types: Mapped[List[str]] = mapped_column(JSON, default=list)
    sprite: Mapped[Optional[str]] = mapped_column(String(500))
    height: Mapped[Optional[int]] = mapped_column(Integer)
    weight: Mapped[Optional[int]] = mapped_column(Integer)
    base_stats: Mapped[Dict[str, int]] = mapped_column(JSON, default=dict)
    abilities: Mapped[List[str]] = mapped_column(JSON, default=list)
    moves: Mapped[List[str]] = mapped_column(JSON, default=list)
    moves_detail: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    # 'order' is a reserved word in SQL
    order: Mapped[Optional[int]] = mapped_column("order", Integer)
    base_experience: Mapped[Optional[int]] = mapped_column(Integer)
    is_default: Mapped[Optional[bool]] = mapped_column(Boolean)
    forms: Mapped[List[str]] = mapped_column(JSON, default=list)
    flavor_text_entries: Mapped[List[Dict[str, str]]] = mapped_column(JSON, default=list)
    evolution_chain: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON(none_as_null=True))
    habitat: Mapped[Optional[str]] = mapped_column(String(50))
    generation: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    capture_rate: Mapped[Optional[int]] = mapped_column(Integer)
    growth_rate: Mapped[Optional[str]] = mapped_column(String(50))
    ev_yield: Mapped[Dict[str, int]] = mapped_column(JSON, default=dict)
    base_happiness: Mapped[Optional[int]] = mapped_column(Integer)
    egg_groups: Mapped[List[str]] = mapped_column(JSON, default=list)
    egg_cycle: Mapped[Optional[int]] = mapped_column(Integer)
    gender_ratio: Mapped[Optional[Dict[str, float]]] = mapped_column(JSON(none_as_null=True))
    type_effectiveness: Mapped[Optional[Dict[str, List[str]]]] = mapped_column(JSON(none_as_null=True))


class Move(TimestampMixin, Base):
    __tablename__ = "moves"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # physical / special / status
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    move_type: Mapped[Optional[str]] = mapped_column(String(20))
    power: Mapped[Optional[int]] = mapped_column(Integer)
    accuracy: Mapped[Optional[int]] = mapped_column(Integer)
    pp: Mapped[Optional[int]] = mapped_column(Integer)
    description: Mapped[Optional[str]] = mapped_column(Text)


class Team(TimestampMixin, Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    owner: Mapped[User] = relationship(back_populates="teams")
    roster: Mapped[List["TeamPokemon"]] = relationship(
        back_populates="team",
        order_by="TeamPokemon.slot",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class TeamPokemon(TimestampMixin, Base):
    """One roster entry: a Pokemon bound to a team slot plus its customization."""

    __tablename__ = "team_pokemon"
    __table_args__ = (UniqueConstraint("team_id", "slot", name="uq_team_pokemon_team_slot"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    team_id: Mapped[int] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    pokemon_id: Mapped[int] = mapped_column(
        ForeignKey("pokemon.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False
    )
    slot: Mapped[int] = mapped_column(Integer, nullable=False)
    moves: Mapped[Optional[List[str]]] = mapped_column(JSON(none_as_null=True))
    ability: Mapped[Optional[str]] = mapped_column(String(100))
    nature: Mapped[Optional[str]] = mapped_column(String(50))

    team: Mapped[Team] = relationship(back_populates="roster")
    pokemon: Mapped[Pokemon] = relationship()
