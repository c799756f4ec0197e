"""Read-only lookups over the Pokemon and move catalog."""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db import Move, Pokemon
from ..errors import NotFoundError

logger = logging.getLogger(__name__)

SPRITE_URL = "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{id}.png"


def sprite_url(pokemon: Pokemon) -> str:
    """Stored sprite, falling back to the PokeAPI sprite repository by external id."""

    return pokemon.sprite or SPRITE_URL.format(id=pokemon.poke_api_id)


def move_name_variations(name: str) -> List[str]:
    """Candidate spellings tried in order when looking a move up by name."""

    candidates = [
        name,
        name.replace("-", " "),
        name.replace(" ", "-"),
        name.lower(),
        name.lower().replace("-", " "),
        name.lower().replace(" ", "-"),
    ]
    seen: set[str] = set()
    ordered: List[str] = []
    for candidate in candidates:
        if candidate not in seen:
            seen.add(candidate)
            ordered.append(candidate)
    return ordered


def _as_number(value: str) -> Optional[float]:
    """Numeric reading of a search term; blank text counts as zero."""

    text = value.strip()
    if not text:
        return 0.0
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class CatalogService:
    """Public catalog queries; no authentication required."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_pokemon(
        self, *, generation: Optional[str] = None, search: Optional[str] = None
    ) -> List[Pokemon]:
        stmt = select(Pokemon)
        if generation:
            stmt = stmt.where(Pokemon.generation == generation)
        if search:
            number = _as_number(search)
            if number is not None:
                if not number.is_integer():
                    return []
                stmt = stmt.where(Pokemon.poke_api_id == int(number))
            else:
                stmt = stmt.where(Pokemon.name.ilike(f"%{search}%"))
        stmt = stmt.order_by(Pokemon.poke_api_id.asc())
        return list(self.db.scalars(stmt))

    def get_pokemon(self, pokemon_id: int) -> Pokemon:
        pokemon = self.db.get(Pokemon, pokemon_id)
        if pokemon is None:
            raise NotFoundError("Pokemon not found")
        return pokemon

    def find_move(self, name: str) -> Move:
        for variation in move_name_variations(name):
            move = self.db.scalars(
                select(Move).where(func.lower(Move.name) == variation.lower()).limit(1)
            ).first()
            if move is not None:
                logger.debug("Resolved move %r via variation %r", name, variation)
                return move
        logger.info("Move not found for any variation of %r", name)
        raise NotFoundError("Move not found")
