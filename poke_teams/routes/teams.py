"""Authenticated team and roster routes."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_user
from ..models import CurrentUser
from ..schemas import (
    AddedPokemonOut,
    AddPokemonRequest,
    AddPokemonResponse,
    EditPokemonRequest,
    MessageResponse,
    TeamCreateRequest,
    TeamOut,
    TeamUpdateRequest,
)
from ..services import TeamService

router = APIRouter(prefix="/teams", tags=["teams"], dependencies=[Depends(get_current_user)])


@router.post("", response_model=TeamOut, status_code=status.HTTP_201_CREATED)
def create_team(
    body: TeamCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TeamService(db).create(body.name, user.id)


@router.get("", response_model=List[TeamOut])
def list_teams(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return TeamService(db).list(user.id)


@router.get("/{team_id}", response_model=TeamOut)
def get_team(
    team_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Team with its roster ordered by slot."""
    return TeamService(db).get(team_id, user.id)


@router.put("/{team_id}", response_model=TeamOut)
def update_team(
    team_id: int,
    body: TeamUpdateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TeamService(db).update(
        team_id, user.id, name=body.name, pokemon_ids=body.pokemon_ids
    )


@router.delete("/{team_id}", response_model=MessageResponse)
def delete_team(
    team_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    TeamService(db).delete(team_id, user.id)
    return MessageResponse(message="Team deleted")


@router.post(
    "/{team_id}/pokemon",
    response_model=AddPokemonResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_pokemon(
    team_id: int,
    body: AddPokemonRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> AddPokemonResponse:
    team, entry = TeamService(db).add_pokemon(team_id, user.id, body.pokemon_id)
    return AddPokemonResponse(
        team=TeamOut.model_validate(team),
        pokemon=AddedPokemonOut(
            id=entry.id,
            team_id=entry.team_id,
            pokemon_id=entry.pokemon_id,
            slot=entry.slot,
            name=entry.pokemon.name,
            moves=entry.moves,
            ability=entry.ability,
            nature=entry.nature,
        ),
    )


@router.delete("/{team_id}/pokemon/{pokemon_id}", response_model=TeamOut)
def remove_pokemon(
    team_id: int,
    pokemon_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TeamService(db).remove_pokemon(team_id, user.id, pokemon_id)


@router.patch("/{team_id}/pokemon/{pokemon_id}", response_model=MessageResponse)
def edit_pokemon_details(
    team_id: int,
    pokemon_id: int,
    body: EditPokemonRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> MessageResponse:
    TeamService(db).edit_pokemon_details(
        team_id,
        user.id,
        pokemon_id,
        moves=body.moves,
        ability=body.ability,
        nature=body.nature,
    )
    return MessageResponse(message="Pokemon details updated successfully")
