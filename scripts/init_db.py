from __future__ import annotations

import argparse
import os
from functools import partial

from catalog.config.settings import settings
from catalog.db.connection import open_database
from catalog.db.seed import seed_events, seed_races
from catalog.repositories.sqlite import EventsRepoSqlite, RacesRepoSqlite


def init_races(path: str, count: int) -> int:
    conn = open_database(path)
    try:
        repo = RacesRepoSqlite(conn, seeder=partial(seed_races, count=count))
        repo.init()
        return len(repo.list())
    finally:
        conn.close()


def init_events(path: str, count: int) -> int:
    conn = open_database(path)
    try:
        repo = EventsRepoSqlite(conn, seeder=partial(seed_events, count=count))
        repo.init()
        return len(repo.list())
    finally:
        conn.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create and seed the catalog SQLite databases")
    parser.add_argument("--racing-db", default=settings.racing_db, help="Races DB file")
    parser.add_argument("--sports-db", default=settings.sports_db, help="Events DB file")
    parser.add_argument("--count", type=int, default=settings.seed_count, help="Rows per table")
    args = parser.parse_args(argv)

    races = init_races(args.racing_db, args.count)
    events = init_events(args.sports_db, args.count)

    print(f"Races: {races} rows in {os.path.abspath(args.racing_db)}")
    print(f"Events: {events} rows in {os.path.abspath(args.sports_db)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
