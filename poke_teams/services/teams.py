"""Team CRUD and roster slot management."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from ..db import Pokemon, Team, TeamPokemon
from ..db.tables import MAX_TEAM_SIZE
from ..errors import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

TEAM_FULL_MESSAGE = f"A team can have a maximum of {MAX_TEAM_SIZE} Pokémon."


def first_free_slot(occupied: Iterable[int]) -> Optional[int]:
    """Lowest slot in 1..6 with no roster entry, or None when the team is full."""

    taken = set(occupied)
    for slot in range(1, MAX_TEAM_SIZE + 1):
        if slot not in taken:
            return slot
    return None


def normalize_moves(moves: Union[str, Sequence[str], None]) -> Optional[List[str]]:
    """Accept a list or a comma separated string; anything else clears the moves."""

    if isinstance(moves, str):
        if not moves:
            return None
        return [move.strip() for move in moves.split(",") if move.strip()]
    if isinstance(moves, (list, tuple)):
        return list(moves)
    return None


class TeamService:
    """Every operation is scoped to the calling owner.

    A team owned by someone else is reported exactly like a missing team.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------
    def create(self, name: str, owner_id: int) -> Team:
        team = Team(name=name, user_id=owner_id)
        self.db.add(team)
        self.db.commit()
        logger.info("User %s created team %s", owner_id, team.id)
        return self.get(team.id, owner_id)

    def list(self, owner_id: int) -> List[Team]:
        stmt = (
            select(Team)
            .options(selectinload(Team.roster).selectinload(TeamPokemon.pokemon))
            .where(Team.user_id == owner_id)
            .order_by(Team.id)
        )
        return list(self.db.scalars(stmt))

    def get(self, team_id: int, owner_id: int) -> Team:
        stmt = (
            select(Team)
            .options(selectinload(Team.roster).selectinload(TeamPokemon.pokemon))
            .where(Team.id == team_id, Team.user_id == owner_id)
            .execution_options(populate_existing=True)
        )
        team = self.db.scalars(stmt).first()
        if team is None:
            raise NotFoundError("Team not found")
        return team

    def update(
        self,
        team_id: int,
        owner_id: int,
        *,
        name: Optional[str] = None,
        pokemon_ids: Optional[Sequence[int]] = None,
    ) -> Team:
        team = self._owned_team(team_id, owner_id)
        if name and name.strip():
            team.name = name.strip()

        if pokemon_ids is not None:
            if len(pokemon_ids) > MAX_TEAM_SIZE:
                raise BadRequestError(TEAM_FULL_MESSAGE)
            self._require_pokemon(pokemon_ids)
            # Full replace: per-slot customization is not carried over.
            self.db.execute(delete(TeamPokemon).where(TeamPokemon.team_id == team.id))
            self.db.add_all(
                TeamPokemon(team_id=team.id, pokemon_id=pokemon_id, slot=index)
                for index, pokemon_id in enumerate(pokemon_ids, start=1)
            )

        self.db.commit()
        return self.get(team.id, owner_id)

    def delete(self, team_id: int, owner_id: int) -> None:
        team = self._owned_team(team_id, owner_id)
        self.db.execute(delete(TeamPokemon).where(TeamPokemon.team_id == team.id))
        self.db.delete(team)
        self.db.commit()
        logger.info("User %s deleted team %s", owner_id, team_id)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    def add_pokemon(self, team_id: int, owner_id: int, pokemon_id: int) -> Tuple[Team, TeamPokemon]:
        team = self._owned_team(team_id, owner_id)
        pokemon = self.db.get(Pokemon, pokemon_id)
        if pokemon is None:
            raise NotFoundError("Pokemon not found")

        # Not serialized per team. Two concurrent adds can pick the same slot; the
        # loser hits uq_team_pokemon_team_slot and is answered with a 400.
        occupied = list(
            self.db.scalars(select(TeamPokemon.slot).where(TeamPokemon.team_id == team.id))
        )
        if len(occupied) >= MAX_TEAM_SIZE:
            raise BadRequestError(TEAM_FULL_MESSAGE)
        slot = first_free_slot(occupied)
        if slot is None:
            raise BadRequestError(TEAM_FULL_MESSAGE)

        entry = TeamPokemon(team_id=team.id, pokemon_id=pokemon.id, slot=slot)
        self.db.add(entry)
        self.db.commit()
        logger.debug("Team %s: %s placed in slot %s", team.id, pokemon.name, slot)
        return self.get(team.id, owner_id), entry

    def remove_pokemon(self, team_id: int, owner_id: int, pokemon_id: int) -> Team:
        team = self._owned_team(team_id, owner_id)
        result = self.db.execute(
            delete(TeamPokemon).where(
                TeamPokemon.team_id == team.id,
                TeamPokemon.pokemon_id == pokemon_id,
            )
        )
        if not result.rowcount:
            self.db.rollback()
            raise NotFoundError("Pokemon not found in team")
        self.db.commit()
        return self.get(team.id, owner_id)

    def edit_pokemon_details(
        self,
        team_id: int,
        owner_id: int,
        pokemon_id: int,
        *,
        moves: Union[str, Sequence[str], None] = None,
        ability: Optional[str] = None,
        nature: Optional[str] = None,
    ) -> TeamPokemon:
        stmt = (
            select(TeamPokemon)
            .join(Team, Team.id == TeamPokemon.team_id)
            .where(
                TeamPokemon.team_id == team_id,
                TeamPokemon.pokemon_id == pokemon_id,
                Team.user_id == owner_id,
            )
            .order_by(TeamPokemon.slot)
            .limit(1)
        )
        entry = self.db.scalars(stmt).first()
        if entry is None:
            raise NotFoundError("Pokemon not found in team")

        entry.moves = normalize_moves(moves)
        entry.ability = ability or None
        entry.nature = nature or None
        self.db.commit()
        return entry

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _owned_team(self, team_id: int, owner_id: int) -> Team:
        team = self.db.scalars(
            select(Team).where(Team.id == team_id, Team.user_id == owner_id)
        ).first()
        if team is None:
            raise NotFoundError("Team not found")
        return team

    def _require_pokemon(self, pokemon_ids: Sequence[int]) -> None:
        wanted = set(pokemon_ids)
        if not wanted:
            return
        found = set(self.db.scalars(select(Pokemon.id).where(Pokemon.id.in_(wanted))))
        if wanted - found:
            raise NotFoundError("Pokemon not found")
