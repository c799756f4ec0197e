"""Shared fixtures: an app on a throwaway SQLite file plus a small catalog."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from poke_teams.config import Settings
from poke_teams.db import Move, Pokemon, User
from poke_teams.dependencies import get_gemini_client
from poke_teams.security import hash_password, sign_token
from poke_teams.web_server import create_app

CATALOG = [
    # (poke_api_id, name, types, generation)
    (1, "bulbasaur", ["grass", "poison"], "generation-i"),
    (4, "charmander", ["fire"], "generation-i"),
    (5, "charmeleon", ["fire"], "generation-i"),
    (6, "charizard", ["fire", "flying"], "generation-i"),
    (25, "pikachu", ["electric"], "generation-i"),
    (7, "squirtle", ["water"], "generation-i"),
    (152, "chikorita", ["grass"], "generation-ii"),
    (250, "ho-oh", ["fire", "flying"], "generation-ii"),
]


class FakeGemini:
    def __init__(self, reply: str = "", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret-key",
        google_client_id="test-google-client-id",
    )


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog(db) -> Dict[str, Pokemon]:
    rows = {}
    for poke_api_id, name, types, generation in CATALOG:
        rows[name] = Pokemon(
            poke_api_id=poke_api_id,
            name=name,
            types=types,
            generation=generation,
            base_stats={
                "hp": 45,
                "attack": 49,
                "defense": 49,
                "special-attack": 65,
                "special-defense": 65,
                "speed": 45,
            },
            abilities=["overgrow"] if "grass" in types else ["blaze"],
        )
    db.add_all(rows.values())
    db.add_all(
        [
            Move(name="tackle", category="physical", move_type="normal", power=40, accuracy=100, pp=35),
            Move(name="thunder-punch", category="physical", move_type="electric", power=75, accuracy=100),
            Move(name="vine whip", category="physical", move_type="grass", power=45, accuracy=100),
            Move(name="growl", category="status", move_type="normal", power=None, accuracy=100),
        ]
    )
    db.commit()
    return rows


def make_user(db, username: str = "ash", email: str = "ash@example.com", password: str = "pikachu123") -> User:
    user = User(username=username, email=email, password_hash=hash_password(password), role="trainer")
    db.add(user)
    db.commit()
    return user


def bearer(settings: Settings, user: User) -> Dict[str, str]:
    token = sign_token({"id": user.id, "role": user.role}, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def trainer(db) -> User:
    return make_user(db)


@pytest.fixture
def auth(settings: Settings, trainer: User) -> Dict[str, str]:
    return bearer(settings, trainer)


@pytest.fixture
def fake_gemini(app) -> FakeGemini:
    fake = FakeGemini()
    app.dependency_overrides[get_gemini_client] = lambda: fake
    return fake
