from __future__ import annotations

import argparse
import sqlite3
from functools import partial
from typing import Sequence

import uvicorn

from catalog.api.rpc import create_sports_app
from catalog.application.services import SportsService
from catalog.config.settings import settings, split_endpoint
from catalog.db.connection import open_database
from catalog.db.seed import seed_events
from catalog.logging_config import get_logger
from catalog.repositories.sqlite import EventsRepoSqlite


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Serve the sports catalog RPC endpoint")
    p.add_argument(
        "--rpc-endpoint",
        default=settings.sports_endpoint,
        help="host:port to listen on (default: %(default)s)",
    )
    p.add_argument("--db", default=settings.sports_db, help="Path to SQLite DB file")
    p.add_argument(
        "--seed-count",
        type=int,
        default=settings.seed_count,
        help="Events seeded into a fresh database (default: %(default)s)",
    )
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger()

    try:
        host, port = split_endpoint(args.rpc_endpoint)
        conn = open_database(args.db)
        repo = EventsRepoSqlite(conn, seeder=partial(seed_events, count=args.seed_count))
        repo.init()
    except (RuntimeError, sqlite3.Error, OSError) as exc:
        logger.error("Failed running sports server", extra={"error": str(exc)})
        return 1

    app = create_sports_app(SportsService(repo))
    logger.info("RPC server listening", extra={"endpoint": args.rpc_endpoint, "db": args.db})
    try:
        uvicorn.run(app, host=host, port=port, log_config=None)
    finally:
        conn.close()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
