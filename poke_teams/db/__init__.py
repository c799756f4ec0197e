"""Relational schema and session plumbing."""

from .session import create_session_factory, get_db, init_db, make_engine
from .tables import Base, Move, Pokemon, Team, TeamPokemon, User

__all__ = [
    "Base",
    "Move",
    "Pokemon",
    "Team",
    "TeamPokemon",
    "User",
    "create_session_factory",
    "get_db",
    "init_db",
    "make_engine",
]
