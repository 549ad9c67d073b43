from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import AbstractSet, Callable, ClassVar, Generic, Optional, TypeVar

from catalog.domain.entities import CatalogRecord, ListFilter
from catalog.domain.errors import StorageError
from catalog.domain.value_objects.enums import SortField

from .init_guard import InitGuard
from .materialize import RECORD_COLUMNS, materialize, utcnow
from .query import DEFAULT_SORTABLE, QueryFragment, build_list_query

R = TypeVar("R", bound=CatalogRecord)

Seeder = Callable[[sqlite3.Connection], object]
Clock = Callable[[], datetime]

logger = logging.getLogger(__name__)


class CatalogRepoSqlite(Generic[R]):
    """Shared SQLite list/init logic for the catalog tables.

    Subclasses name the table, its DDL, the record type, the columns it may
    be sorted by and the seeder used by :meth:`init` when none is injected.
    The constructor creates the table if missing, so :meth:`list` works (and
    returns nothing) before :meth:`init` has seeded. While a seed is running,
    :meth:`list` blocks until it has finished.
    """

    table: ClassVar[str]
    ddl: ClassVar[str]
    record_type: ClassVar[type[CatalogRecord]]
    sortable: ClassVar[AbstractSet[SortField]] = DEFAULT_SORTABLE
    default_seeder: ClassVar[Optional[Seeder]] = None

    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        seeder: Optional[Seeder] = None,
        clock: Clock = utcnow,
    ) -> None:
        self._conn = conn
        self._seeder = seeder if seeder is not None else self.default_seeder
        self._clock = clock
        self._guard = InitGuard(self.table)
        self._conn.execute(self.ddl)
        self._conn.commit()

    @property
    def base_query(self) -> str:
        return f"SELECT {', '.join(RECORD_COLUMNS)} FROM {self.table}"

    @property
    def initialized(self) -> bool:
        return self._guard.done

    def init(self) -> None:
        self._guard.run(self._seed)

    def _seed(self) -> None:
        if self._seeder is None:
            return
        self._seeder(self._conn)

    def build_query(self, flt: Optional[ListFilter]) -> QueryFragment:
        return build_list_query(self.base_query, flt, self.sortable)

    def list(self, flt: Optional[ListFilter] = None) -> list[R]:
        # A seed in progress writes uncommitted rows on this same connection.
        self._guard.wait()
        sql, args = self.build_query(flt)
        logger.debug("Listing %s", self.table, extra={"sql": sql, "params": list(args)})
        try:
            cur = self._conn.execute(sql, args)
        except sqlite3.Error as exc:
            raise StorageError(f"querying {self.table} failed: {exc}") from exc
        try:
            return materialize(cur, self.record_type, self._clock)  # type: ignore[return-value]
        finally:
            cur.close()
