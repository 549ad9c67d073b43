from .events_sqlite import EventsRepoSqlite
from .races_sqlite import RacesRepoSqlite

__all__ = [
    "EventsRepoSqlite",
    "RacesRepoSqlite",
]
