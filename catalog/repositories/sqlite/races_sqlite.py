from __future__ import annotations

from catalog.db.seed import seed_races
from catalog.domain.entities import Race

from ..races import RacesRepo
from .catalog_sqlite import CatalogRepoSqlite


class RacesRepoSqlite(CatalogRepoSqlite[Race], RacesRepo):
    """SQLite implementation of :class:`RacesRepo`.

    Example:
        >>> import sqlite3
        >>> repo = RacesRepoSqlite(sqlite3.connect(":memory:"))
        >>> repo.list()
        []
        >>> repo.init()
        >>> len(repo.list())
        100
    """

    table = "races"
    ddl = """
        CREATE TABLE IF NOT EXISTS races (
            id INTEGER PRIMARY KEY,
            meeting_id INTEGER,
            name TEXT,
            number INTEGER,
            visible INTEGER,
            advertised_start_time DATETIME
        )
    """
    record_type = Race
    default_seeder = staticmethod(seed_races)
