"""The error translation layer, exercised on a throwaway app."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from poke_teams.errors import (
    AIServiceError,
    BadRequestError,
    ErrorKind,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    install_error_handlers,
)


class Payload(BaseModel):
    count: int


@pytest.fixture
def probe() -> TestClient:
    app = FastAPI()
    install_error_handlers(app)

    raisers = {
        "bad": BadRequestError("Team name cannot be empty"),
        "unauthorized": UnauthorizedError("Invalid credentials"),
        "forbidden": ForbiddenError(),
        "missing": NotFoundError("Team not found"),
        "ai": AIServiceError(),
        "token": jwt.ExpiredSignatureError("Signature has expired"),
        "integrity": IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email")),
        "boom": KeyError("secret internals"),
    }

    @app.get("/raise/{name}")
    def _raise(name: str):
        raise raisers[name]

    @app.post("/payload")
    def _payload(body: Payload):
        return {"count": body.count}

    return TestClient(app, raise_server_exceptions=False)


def test_error_kind_maps_to_status() -> None:
    assert [kind.status_code for kind in ErrorKind] == [400, 401, 403, 404, 500]
    assert NotFoundError().message == "Not found"


@pytest.mark.parametrize(
    "name, status, message",
    [
        ("bad", 400, "Team name cannot be empty"),
        ("unauthorized", 401, "Invalid credentials"),
        ("forbidden", 403, "Forbidden"),
        ("missing", 404, "Team not found"),
        ("ai", 500, "AI service temporarily unavailable"),
        ("token", 401, "Invalid token"),
    ],
)
def test_app_errors_become_message_bodies(probe: TestClient, name: str, status: int, message: str) -> None:
    response = probe.get(f"/raise/{name}")

    assert response.status_code == status
    assert response.json() == {"message": message}


def test_integrity_error_is_bad_request(probe: TestClient) -> None:
    response = probe.get("/raise/integrity")

    assert response.status_code == 400
    assert response.json() == {"message": "UNIQUE constraint failed: users.email"}


def test_unexpected_error_hides_details(probe: TestClient) -> None:
    response = probe.get("/raise/boom")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}


def test_missing_field_names_the_field(probe: TestClient) -> None:
    response = probe.post("/payload", json={})

    assert response.status_code == 400
    assert response.json() == {"message": "count is required"}


def test_wrong_type_reports_location(probe: TestClient) -> None:
    response = probe.post("/payload", json={"count": "many"})

    assert response.status_code == 400
    assert response.json()["message"].startswith("count: ")


def test_expired_token_on_real_route_is_invalid(client, settings) -> None:
    past = datetime.now(timezone.utc) - timedelta(hours=1)
    token = jwt.encode({"id": 1, "role": "trainer", "exp": past}, settings.jwt_secret, algorithm="HS256")

    response = client.get("/teams", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid token"}
