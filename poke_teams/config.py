"""Environment-driven settings for the API server and CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

# Load default .env first, then overlay .env.local so user-specific keys win.
load_dotenv()
load_dotenv(".env.local", override=True)

DEV_JWT_SECRET = "poke-teams-dev-secret"


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(slots=True)
class Settings:
    """Runtime configuration resolved from the process environment."""

    database_url: str = "sqlite:///./poke_teams.db"
    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 1440
    google_client_id: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./poke_teams.db"),
            jwt_secret=os.getenv("JWT_SECRET") or DEV_JWT_SECRET,
            jwt_expires_minutes=int(os.getenv("JWT_EXPIRES_MINUTES", "1440")),
            google_client_id=os.getenv("GOOGLE_CLIENT_ID") or None,
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")) or ["*"],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def uses_dev_secret(self) -> bool:
        return self.jwt_secret == DEV_JWT_SECRET


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
