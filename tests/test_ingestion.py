"""Catalog import from PokeAPI payloads, with the HTTP client faked out."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from sqlalchemy import select

from poke_teams.clients import PokeAPIClientError
from poke_teams.db import Move, Pokemon
from poke_teams.services.ingestion import CatalogImporter, build_move_record, build_pokemon_record

BASE = "https://pokeapi.co/api/v2"


def _stat(name: str, value: int, effort: int = 0) -> Dict[str, Any]:
    return {"stat": {"name": name}, "base_stat": value, "effort": effort}


PIKACHU = {
    "id": 25,
    "name": "pikachu",
    "height": 4,
    "weight": 60,
    "order": 35,
    "base_experience": 112,
    "is_default": True,
    "types": [{"slot": 1, "type": {"name": "electric"}}],
    "sprites": {
        "front_default": "front.png",
        "other": {"official-artwork": {"front_default": "artwork.png"}},
    },
    "stats": [_stat("hp", 35), _stat("attack", 55), _stat("speed", 90, effort=2)],
    "abilities": [{"ability": {"name": "static"}}, {"ability": {"name": "lightning-rod"}}],
    "moves": [
        {
            "move": {"name": "thunder-shock"},
            "version_group_details": [
                {
                    "move_learn_method": {"name": "level-up"},
                    "level_learned_at": 1,
                    "version_group": {"name": "red-blue"},
                }
            ],
        }
    ],
    "forms": [{"name": "pikachu"}],
    "species": {"url": f"{BASE}/pokemon-species/25/"},
}

PIKACHU_SPECIES = {
    "gender_rate": 4,
    "capture_rate": 190,
    "base_happiness": 50,
    "hatch_counter": 10,
    "habitat": {"name": "forest"},
    "generation": {"name": "generation-i"},
    "growth_rate": {"name": "medium"},
    "egg_groups": [{"name": "ground"}, {"name": "fairy"}],
    "flavor_text_entries": [
        {"flavor_text": "It stores electricity.", "language": {"name": "en"}, "version": {"name": "red"}},
        {"flavor_text": "Il stocke.", "language": {"name": "fr"}, "version": {"name": "red"}},
    ],
    "evolution_chain": {"url": f"{BASE}/evolution-chain/10/"},
}

CHAIN = {"id": 10, "chain": {"species": {"name": "pichu"}}}

MAGNEMITE = {
    "id": 81,
    "name": "magnemite",
    "types": [{"slot": 1, "type": {"name": "electric"}}, {"slot": 2, "type": {"name": "steel"}}],
    "sprites": {"front_default": "magnemite.png"},
    "stats": [_stat("hp", 25)],
    "abilities": [],
    "moves": [],
    "forms": [],
    "species": {"url": f"{BASE}/pokemon-species/81/"},
}

MAGNEMITE_SPECIES = {"gender_rate": -1, "generation": {"name": "generation-i"}}

THUNDERBOLT = {
    "name": "thunderbolt",
    "damage_class": {"name": "special"},
    "type": {"name": "electric"},
    "power": 90,
    "accuracy": 100,
    "pp": 15,
    "effect_entries": [
        {"short_effect": "Paralyse chance.", "language": {"name": "en"}},
    ],
}


class FakePokeAPI:
    def __init__(self, resources: Dict[str, Dict[str, Any]]) -> None:
        self.resources = resources
        self.pokemon: List[Dict[str, str]] = []
        self.moves: List[Dict[str, str]] = []
        self.fetched: List[str] = []

    def list_pokemon(self, *, limit: int = 10000, offset: int = 0) -> List[Dict[str, str]]:
        return self.pokemon[offset : offset + limit]

    def list_moves(self, *, limit: int = 10000, offset: int = 0) -> List[Dict[str, str]]:
        return self.moves[offset : offset + limit]

    def get_resource(self, url: str) -> Dict[str, Any]:
        self.fetched.append(url)
        if url not in self.resources:
            raise PokeAPIClientError(f"404 for {url}")
        return self.resources[url]


@pytest.fixture
def fake_api() -> FakePokeAPI:
    api = FakePokeAPI(
        {
            f"{BASE}/pokemon/25/": PIKACHU,
            f"{BASE}/pokemon-species/25/": PIKACHU_SPECIES,
            f"{BASE}/evolution-chain/10/": CHAIN,
            f"{BASE}/pokemon/81/": MAGNEMITE,
            f"{BASE}/pokemon-species/81/": MAGNEMITE_SPECIES,
            f"{BASE}/move/85/": THUNDERBOLT,
            f"{BASE}/move/74/": {"name": "growth", "damage_class": None},
        }
    )
    api.pokemon = [
        {"name": "pikachu", "url": f"{BASE}/pokemon/25/"},
        {"name": "missingno", "url": f"{BASE}/pokemon/0/"},
        {"name": "magnemite", "url": f"{BASE}/pokemon/81/"},
    ]
    api.moves = [
        {"name": "thunderbolt", "url": f"{BASE}/move/85/"},
        {"name": "growth", "url": f"{BASE}/move/74/"},
    ]
    return api


def test_build_pokemon_record_flattens_payloads() -> None:
    record = build_pokemon_record(PIKACHU, PIKACHU_SPECIES, CHAIN)

    assert record["poke_api_id"] == 25
    assert record["types"] == ["electric"]
    assert record["sprite"] == "artwork.png"
    assert record["base_stats"] == {"hp": 35, "attack": 55, "speed": 90}
    assert record["ev_yield"] == {"speed": 2}
    assert record["abilities"] == ["static", "lightning-rod"]
    assert record["moves"] == ["thunder-shock"]
    assert record["moves_detail"] == [
        {"move": "thunder-shock", "method": "level-up", "level": 1, "version_group": "red-blue"}
    ]
    assert record["flavor_text_entries"] == [{"flavor_text": "It stores electricity.", "version": "red"}]
    assert record["gender_ratio"] == {"female": 50.0, "male": 50.0}
    assert record["generation"] == "generation-i"
    assert record["egg_cycle"] == 10
    assert record["evolution_chain"] == CHAIN
    assert record["type_effectiveness"]["x2"] == ["ground"]


def test_genderless_species_has_no_ratio() -> None:
    record = build_pokemon_record(MAGNEMITE, MAGNEMITE_SPECIES)

    assert record["gender_ratio"] is None
    assert record["sprite"] == "magnemite.png"
    assert record["type_effectiveness"]["x4"] == ["ground"]


def test_build_move_record() -> None:
    assert build_move_record(THUNDERBOLT) == {
        "name": "thunderbolt",
        "category": "special",
        "move_type": "electric",
        "power": 90,
        "accuracy": 100,
        "pp": 15,
        "description": "Paralyse chance.",
    }
    assert build_move_record({"name": "growth", "damage_class": None}) is None


def test_import_pokemon_skips_failures_and_upserts(db, fake_api) -> None:
    importer = CatalogImporter(db, fake_api)

    assert importer.import_pokemon() == 2
    names = db.scalars(select(Pokemon.name).order_by(Pokemon.poke_api_id)).all()
    assert names == ["pikachu", "magnemite"]

    changed_species = dict(PIKACHU_SPECIES, capture_rate=45)
    fake_api.resources[f"{BASE}/pokemon-species/25/"] = changed_species
    fake_api.pokemon = fake_api.pokemon[:1]

    assert importer.import_pokemon() == 1
    rows = db.scalars(select(Pokemon).where(Pokemon.poke_api_id == 25)).all()
    assert len(rows) == 1
    assert rows[0].capture_rate == 45


def test_import_moves_skips_moves_without_damage_class(db, fake_api) -> None:
    assert CatalogImporter(db, fake_api).import_moves() == 1

    moves = db.scalars(select(Move)).all()
    assert [(m.name, m.category, m.pp) for m in moves] == [("thunderbolt", "special", 15)]


def test_fill_type_effectiveness_only_touches_missing_rows(db) -> None:
    done = {"x4": [], "x2": ["rock"], "x1": [], "x0_5": [], "x0_25": [], "x0": []}
    db.add_all(
        [
            Pokemon(poke_api_id=4, name="charmander", types=["fire"]),
            Pokemon(poke_api_id=6, name="charizard", types=["fire", "flying"], type_effectiveness=done),
            Pokemon(poke_api_id=9999, name="mystery", types=[]),
        ]
    )
    db.commit()

    assert CatalogImporter(db, FakePokeAPI({})).fill_type_effectiveness() == 1

    rows = {p.name: p for p in db.scalars(select(Pokemon))}
    assert "water" in rows["charmander"].type_effectiveness["x2"]
    assert rows["charizard"].type_effectiveness == done
    assert rows["mystery"].type_effectiveness is None
