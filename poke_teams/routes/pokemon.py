"""Public catalog routes."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import PokemonOut
from ..services import CatalogService

router = APIRouter(prefix="/pokemon", tags=["pokemon"])


@router.get("", response_model=List[PokemonOut])
def list_pokemon(
    generation: Optional[str] = Query(default=None, description="Generation tag, e.g. 'generation-i'"),
    search: Optional[str] = Query(default=None, description="External id or part of a name"),
    db: Session = Depends(get_db),
):
    """List the catalog ordered by external id."""
    return CatalogService(db).list_pokemon(generation=generation, search=search)


@router.get("/{pokemon_id}", response_model=PokemonOut)
def get_pokemon(pokemon_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_pokemon(pokemon_id)
