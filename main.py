"""Command-line interface for serving the API and loading the catalog."""

from __future__ import annotations

import argparse
import logging
import sys

from poke_teams.clients import PokeAPIClient
from poke_teams.config import Settings, get_settings
from poke_teams.db import create_session_factory, init_db, make_engine
from poke_teams.services.ingestion import CatalogImporter

logger = logging.getLogger("poke_teams")


def _configure_logging(settings: Settings, debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


def _importer(settings: Settings) -> CatalogImporter:
    engine = make_engine(settings.database_url)
    init_db(engine)
    session = create_session_factory(engine)()
    return CatalogImporter(session, PokeAPIClient())


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pokemon catalog and team-building service")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug progress information to stderr",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the REST API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    commands.add_parser("init-db", help="Create all tables")

    seed_pokemon = commands.add_parser("seed-pokemon", help="Import Pokemon from PokeAPI")
    seed_pokemon.add_argument("--limit", type=int, default=10000)
    seed_pokemon.add_argument("--offset", type=int, default=0)

    seed_moves = commands.add_parser("seed-moves", help="Import moves from PokeAPI")
    seed_moves.add_argument("--limit", type=int, default=10000)

    commands.add_parser(
        "fill-type-effectiveness",
        help="Compute type effectiveness for Pokemon rows missing it",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    _configure_logging(settings, args.debug)
    logger.debug("Arguments parsed: %s", args)

    if args.command == "serve":
        from poke_teams.web_server import run

        run(host=args.host, port=args.port, settings=settings)
    elif args.command == "init-db":
        init_db(make_engine(settings.database_url))
        logger.info("Database ready at %s", settings.database_url)
    elif args.command == "seed-pokemon":
        count = _importer(settings).import_pokemon(limit=args.limit, offset=args.offset)
        logger.info("All Pokemon processed (%d imported)", count)
    elif args.command == "seed-moves":
        _importer(settings).import_moves(limit=args.limit)
    elif args.command == "fill-type-effectiveness":
        _importer(settings).fill_type_effectiveness()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
