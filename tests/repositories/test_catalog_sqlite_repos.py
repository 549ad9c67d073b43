# mypy: ignore-errors

from __future__ import annotations

import sqlite3
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest

from catalog.domain.entities import Event, ListFilter, Race
from catalog.domain.errors import InvalidFilter, SeedError, StorageError
from catalog.domain.value_objects.enums import RecordStatus
from catalog.repositories.events import EventsRepo
from catalog.repositories.races import RacesRepo
from catalog.repositories.sqlite import EventsRepoSqlite, RacesRepoSqlite

NOW = datetime(2021, 3, 2, 12, 0, tzinfo=timezone.utc)

RACES = [
    (1, 1, "Alpha", 3, 1, "2021-03-02T10:00:00Z"),
    (2, 2, "Bravo", 1, 0, "2021-03-02T14:00:00Z"),
    (3, 1, "Charlie", 2, 1, "2021-03-02T13:00:00Z"),
    (4, 3, "Delta", 5, 1, "2021-03-02T11:00:00Z"),
]


def _conn() -> sqlite3.Connection:
    return sqlite3.connect(":memory:", check_same_thread=False)


def _insert_races(conn: sqlite3.Connection) -> None:
    conn.executemany(
        "INSERT INTO races (id, meeting_id, name, number, visible, advertised_start_time)"
        " VALUES (?, ?, ?, ?, ?, ?)",
        RACES,
    )
    conn.commit()


def _insert_events(conn: sqlite3.Connection) -> None:
    conn.executemany(
        "INSERT INTO events (id, meeting_id, name, number, visible, advertised_start_time,"
        " level, sold_out) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
        [
            (1, 1, "Tennis", 1, 1, "2021-03-02T10:00:00Z", "Youth", 0),
            (2, 1, "Archery", 2, 1, "2021-03-02T15:00:00Z", "Amateur", 1),
            (3, 2, "Fencing", 3, 0, "2021-03-02T16:00:00Z", "Professional", 0),
        ],
    )
    conn.commit()


@pytest.fixture
def races_repo() -> RacesRepoSqlite:
    conn = _conn()
    repo = RacesRepoSqlite(conn, seeder=_insert_races, clock=lambda: NOW)
    repo.init()
    return repo


@pytest.fixture
def events_repo() -> EventsRepoSqlite:
    conn = _conn()
    repo = EventsRepoSqlite(conn, seeder=_insert_events, clock=lambda: NOW)
    repo.init()
    return repo


def test_repos_implement_interfaces(races_repo, events_repo) -> None:
    assert isinstance(races_repo, RacesRepo)
    assert isinstance(events_repo, EventsRepo)


def test_list_without_filter_returns_everything(races_repo) -> None:
    races = races_repo.list()
    assert {r.id for r in races} == {1, 2, 3, 4}
    assert all(isinstance(r, Race) for r in races)


def test_default_order_is_start_time_descending(races_repo) -> None:
    races = races_repo.list(ListFilter())
    assert [r.id for r in races] == [2, 3, 4, 1]


def test_meeting_and_visibility_filter(races_repo) -> None:
    races = races_repo.list(ListFilter(meeting_ids=[1, 2], visible_only=True))
    assert [r.id for r in races] == [3, 1]
    assert all(r.visible for r in races)


def test_sort_by_number_ascending(races_repo) -> None:
    races = races_repo.list(ListFilter(sort_by="number", order="asc"))
    assert [r.number for r in races] == [1, 2, 3, 5]


def test_status_is_derived_against_clock(races_repo) -> None:
    by_id = {r.id: r for r in races_repo.list()}
    assert by_id[1].status is RecordStatus.CLOSED
    assert by_id[4].status is RecordStatus.CLOSED
    assert by_id[2].status is RecordStatus.OPEN
    assert by_id[3].status is RecordStatus.OPEN


def test_status_changes_between_calls_without_storage_change() -> None:
    now = [NOW]
    repo = RacesRepoSqlite(_conn(), seeder=_insert_races, clock=lambda: now[0])
    repo.init()
    assert {r.id: r.status for r in repo.list()}[2] is RecordStatus.OPEN
    now[0] = NOW + timedelta(hours=3)
    assert {r.id: r.status for r in repo.list()}[2] is RecordStatus.CLOSED


def test_no_matching_rows_is_empty_list(races_repo) -> None:
    assert races_repo.list(ListFilter(meeting_ids=[99])) == []


def test_list_before_init_is_empty() -> None:
    repo = RacesRepoSqlite(_conn(), seeder=_insert_races)
    assert not repo.initialized
    assert repo.list() == []
    repo.init()
    assert repo.initialized
    assert len(repo.list()) == 4


def test_list_always_requeries_storage(races_repo) -> None:
    assert len(races_repo.list()) == 4
    races_repo._conn.execute("DELETE FROM races WHERE id = 1")
    assert len(races_repo.list()) == 3


def test_invalid_sort_by_is_rejected_before_querying(races_repo) -> None:
    with pytest.raises(InvalidFilter):
        races_repo.list(ListFilter(sort_by="name; DROP TABLE races"))
    assert len(races_repo.list()) == 4


def test_races_cannot_sort_by_event_only_columns(races_repo) -> None:
    with pytest.raises(InvalidFilter):
        races_repo.list(ListFilter(sort_by="level"))


def test_events_sort_by_level(events_repo) -> None:
    events = events_repo.list(ListFilter(sort_by="level", order="ascending"))
    assert [e.name for e in events] == ["Archery", "Fencing", "Tennis"]
    assert all(isinstance(e, Event) for e in events)


def test_events_filters(events_repo) -> None:
    events = events_repo.list(ListFilter(meeting_ids=[1], visible_only=True, sort_by="id"))
    assert [e.id for e in events] == [2, 1]
    assert events[0].status is RecordStatus.OPEN
    assert events[1].status is RecordStatus.CLOSED


def test_bad_stored_timestamp_fails_whole_list(races_repo) -> None:
    races_repo._conn.execute(
        "INSERT INTO races VALUES (9, 1, 'Broken', 1, 1, 'soon')"
    )
    with pytest.raises(StorageError):
        races_repo.list()


def test_query_failure_is_storage_error(races_repo) -> None:
    races_repo._conn.execute("DROP TABLE races")
    with pytest.raises(StorageError) as excinfo:
        races_repo.list()
    assert isinstance(excinfo.value.__cause__, sqlite3.OperationalError)


def test_init_seeds_once_under_concurrency() -> None:
    calls: list[int] = []
    lock = threading.Lock()
    start = threading.Barrier(5)

    def seeder(conn: sqlite3.Connection) -> None:
        with lock:
            calls.append(1)
        _insert_races(conn)

    repo = RacesRepoSqlite(_conn(), seeder=seeder, clock=lambda: NOW)

    def call(_: int) -> int:
        start.wait()
        repo.init()
        return len(repo.list())

    with ThreadPoolExecutor(max_workers=5) as pool:
        counts = list(pool.map(call, range(5)))

    assert calls == [1]
    assert counts == [4] * 5


def test_seed_failure_is_sticky() -> None:
    calls: list[int] = []

    def seeder(conn: sqlite3.Connection) -> None:
        calls.append(1)
        conn.execute("INSERT INTO races (id) VALUES ('x', 'y')")

    repo = RacesRepoSqlite(_conn(), seeder=seeder)
    with pytest.raises(SeedError) as first:
        repo.init()
    with pytest.raises(SeedError) as second:
        repo.init()
    assert first.value is second.value
    assert isinstance(first.value.__cause__, sqlite3.Error)
    assert calls == [1]
    assert not repo.initialized


def test_default_seeders_populate_tables() -> None:
    races = RacesRepoSqlite(_conn())
    events = EventsRepoSqlite(_conn())
    races.init()
    events.init()
    assert len(races.list()) == 100
    assert len(events.list(ListFilter(sort_by="sold_out"))) == 100


def test_base_query_selects_record_columns() -> None:
    repo = EventsRepoSqlite(_conn(), seeder=lambda conn: None)
    assert repo.base_query == (
        "SELECT id, meeting_id, name, number, visible, advertised_start_time FROM events"
    )


def test_list_waits_for_a_running_seed() -> None:
    first_row = threading.Event()

    def slow_seeder(conn: sqlite3.Connection) -> None:
        for race_id in range(1, 11):
            conn.execute(
                "INSERT INTO races VALUES (?, 1, 'Slow', 1, 1, '2021-03-02T10:00:00Z')",
                (race_id,),
            )
            first_row.set()
            time.sleep(0.02)
        conn.commit()

    repo = RacesRepoSqlite(_conn(), seeder=slow_seeder, clock=lambda: NOW)
    worker = threading.Thread(target=repo.init)
    worker.start()
    assert first_row.wait(timeout=5)

    seen = len(repo.list())
    worker.join()

    assert seen == 10
    assert repo.initialized
