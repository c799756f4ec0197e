"""Caller identity decoded from a bearer token."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class CurrentUser:
    """Claims attached to an authenticated request; never re-read from storage."""

    id: int
    role: str = "trainer"
