"""FastAPI application exposing the catalog, auth, team and AI routes."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .db import create_session_factory, init_db, make_engine
from .errors import install_error_handlers
from .routes import ai, auth, moves, pokemon, teams

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app; ``settings`` defaults to the environment configuration."""

    settings = settings or get_settings()
    if settings.uses_dev_secret:
        logger.warning("JWT_SECRET is not set; using the development signing key")

    app = FastAPI(
        title="Poke Teams API",
        description="Pokemon catalog, trainer accounts and team building",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    engine = make_engine(settings.database_url)
    init_db(engine)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.gemini_client = None
    app.dependency_overrides[get_settings] = lambda: settings

    install_error_handlers(app)

    @app.get("/", include_in_schema=False)
    def root() -> dict[str, str]:
        return {"message": "Poke Teams API running"}

    app.include_router(pokemon.router)
    app.include_router(moves.router)
    app.include_router(auth.router)
    app.include_router(teams.router)
    app.include_router(ai.router)
    return app


def run(host: str = "127.0.0.1", port: int = 8000, settings: Optional[Settings] = None) -> None:
    """Entry point for running the web server."""
    import uvicorn

    logger.info("Starting web server at http://%s:%s", host, port)
    uvicorn.run(create_app(settings), host=host, port=port)
