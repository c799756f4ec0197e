"""Public move lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import MoveOut
from ..services import CatalogService

router = APIRouter(prefix="/api/moves", tags=["moves"])


@router.get("/{name}", response_model=MoveOut)
def get_move(name: str, db: Session = Depends(get_db)) -> MoveOut:
    """Look a move up, tolerating hyphen/space and case differences in the name."""
    move = CatalogService(db).find_move(name)
    return MoveOut(
        name=move.name,
        type=move.move_type,
        category=move.category,
        power=move.power,
        accuracy=move.accuracy,
        pp=move.pp,
        description=move.description,
    )
