"""APIRouters grouped by resource."""

from . import ai, auth, moves, pokemon, teams

__all__ = ["ai", "auth", "moves", "pokemon", "teams"]
