"""Populate the catalog tables from PokeAPI.

Pokemon rows are upserted by external id and moves by name. A failure on a
single record is logged and skipped so a long import can finish.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..clients import PokeAPIClient, PokeAPIClientError
from ..data import effectiveness_summary
from ..db import Move, Pokemon

logger = logging.getLogger(__name__)


def _english(entries: List[Dict[str, Any]], key: str) -> Optional[str]:
    for entry in entries or []:
        if (entry.get("language") or {}).get("name") == "en":
            return entry.get(key)
    return None


def build_pokemon_record(
    detail: Dict[str, Any],
    species: Dict[str, Any],
    evolution_chain: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Flatten PokeAPI pokemon/species/evolution payloads into column values."""

    stats = detail.get("stats", [])
    types = [slot["type"]["name"] for slot in detail.get("types", [])]
    artwork = ((detail.get("sprites") or {}).get("other") or {}).get("official-artwork") or {}

    gender_ratio = None
    gender_rate = species.get("gender_rate")
    # -1 marks a genderless species
    if gender_rate is not None and gender_rate != -1:
        gender_ratio = {
            "female": gender_rate / 8 * 100,
            "male": (8 - gender_rate) / 8 * 100,
        }

    return {
        "poke_api_id": detail["id"],
        "name": detail["name"],
        "types": types,
        "sprite": artwork.get("front_default") or (detail.get("sprites") or {}).get("front_default"),
        "height": detail.get("height"),
        "weight": detail.get("weight"),
        "base_stats": {s["stat"]["name"]: s["base_stat"] for s in stats},
        "abilities": [a["ability"]["name"] for a in detail.get("abilities", [])],
        "moves": [m["move"]["name"] for m in detail.get("moves", [])],
        "moves_detail": [
            {
                "move": m["move"]["name"],
                "method": vgd["move_learn_method"]["name"],
                "level": vgd["level_learned_at"],
                "version_group": vgd["version_group"]["name"],
            }
            for m in detail.get("moves", [])
            for vgd in m.get("version_group_details", [])
        ],
        "order": detail.get("order"),
        "base_experience": detail.get("base_experience"),
        "is_default": detail.get("is_default"),
        "forms": [f["name"] for f in detail.get("forms", [])],
        "flavor_text_entries": [
            {"flavor_text": e["flavor_text"], "version": e["version"]["name"]}
            for e in species.get("flavor_text_entries", [])
            if e.get("language", {}).get("name") == "en"
        ],
        "evolution_chain": evolution_chain,
        "habitat": (species.get("habitat") or {}).get("name"),
        "generation": (species.get("generation") or {}).get("name"),
        "capture_rate": species.get("capture_rate"),
        "growth_rate": (species.get("growth_rate") or {}).get("name"),
        "ev_yield": {s["stat"]["name"]: s["effort"] for s in stats if s.get("effort", 0) > 0},
        "base_happiness": species.get("base_happiness"),
        "egg_groups": [g["name"] for g in species.get("egg_groups", [])],
        "egg_cycle": species.get("hatch_counter"),
        "gender_ratio": gender_ratio,
        "type_effectiveness": effectiveness_summary(types) if types else None,
    }


def build_move_record(detail: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    category = (detail.get("damage_class") or {}).get("name")
    if not category:
        return None
    return {
        "name": detail["name"],
        "category": category,
        "move_type": (detail.get("type") or {}).get("name"),
        "power": detail.get("power"),
        "accuracy": detail.get("accuracy"),
        "pp": detail.get("pp"),
        "description": _english(detail.get("effect_entries", []), "short_effect"),
    }


class CatalogImporter:
    def __init__(self, db: Session, client: Optional[PokeAPIClient] = None) -> None:
        self.db = db
        self.client = client or PokeAPIClient()

    def import_pokemon(self, *, limit: int = 10000, offset: int = 0) -> int:
        imported = 0
        for entry in self.client.list_pokemon(limit=limit, offset=offset):
            try:
                detail = self.client.get_resource(entry["url"])
                species = self.client.get_resource(detail["species"]["url"])
                chain_url = (species.get("evolution_chain") or {}).get("url")
                chain = self.client.get_resource(chain_url) if chain_url else None
                self._upsert(Pokemon, Pokemon.poke_api_id, build_pokemon_record(detail, species, chain))
                self.db.commit()
            except (PokeAPIClientError, KeyError, TypeError) as exc:
                self.db.rollback()
                logger.error("Error processing %s: %s", entry.get("name"), exc)
                continue
            imported += 1
            logger.info("Inserted/updated: %s", detail["name"])
        return imported

    def import_moves(self, *, limit: int = 10000, offset: int = 0) -> int:
        imported = 0
        for entry in self.client.list_moves(limit=limit, offset=offset):
            try:
                record = build_move_record(self.client.get_resource(entry["url"]))
                if record is None:
                    logger.debug("Skipping %s: no damage class", entry.get("name"))
                    continue
                self._upsert(Move, Move.name, record)
                self.db.commit()
            except (PokeAPIClientError, KeyError, TypeError) as exc:
                self.db.rollback()
                logger.error("Error processing %s: %s", entry.get("name"), exc)
                continue
            imported += 1
        logger.info("Imported %d moves", imported)
        return imported

    def fill_type_effectiveness(self) -> int:
        """Compute the effectiveness summary for rows that are missing one."""

        updated = 0
        pending = list(self.db.scalars(select(Pokemon).where(Pokemon.type_effectiveness.is_(None))))
        for pokemon in pending:
            if not pokemon.types:
                logger.info("Skipping %s - no types data", pokemon.name)
                continue
            pokemon.type_effectiveness = effectiveness_summary(pokemon.types)
            updated += 1
        self.db.commit()
        logger.info("Filled type effectiveness for %d Pokemon", updated)
        return updated

    def _upsert(self, model, key_column, values: Dict[str, Any]) -> None:
        key = values[key_column.key]
        row = self.db.scalars(select(model).where(key_column == key)).first()
        if row is None:
            self.db.add(model(**values))
            return
        for column, value in values.items():
            setattr(row, column, value)
