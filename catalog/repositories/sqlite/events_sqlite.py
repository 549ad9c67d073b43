from __future__ import annotations

from catalog.db.seed import seed_events
from catalog.domain.entities import Event
from catalog.domain.value_objects.enums import SortField

from ..events import EventsRepo
from .catalog_sqlite import CatalogRepoSqlite
from .query import DEFAULT_SORTABLE


class EventsRepoSqlite(CatalogRepoSqlite[Event], EventsRepo):
    """SQLite implementation of :class:`EventsRepo`.

    The table also stores ``level`` and ``sold_out``; they can be sorted by
    but are not part of the listed record.
    """

    table = "events"
    ddl = """
        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY,
            meeting_id INTEGER,
            name TEXT,
            number INTEGER,
            visible INTEGER,
            advertised_start_time DATETIME,
            level TEXT,
            sold_out INTEGER
        )
    """
    record_type = Event
    default_seeder = staticmethod(seed_events)
    sortable = DEFAULT_SORTABLE | {SortField.LEVEL, SortField.SOLD_OUT}
