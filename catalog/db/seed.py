"""Dummy data used to populate fresh catalog databases.

Rows get ids ``1..count`` and are inserted with ``INSERT OR IGNORE`` so
seeding an already populated file leaves existing rows alone.
"""

from __future__ import annotations

import random
import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

DEFAULT_SEED_COUNT = 100

RACE_NAMES = [
    "North Dakota Cup",
    "Rhode Island Stakes",
    "Oregon Handicap",
    "Nevada Sprint",
    "Vermont Plate",
    "Idaho Classic",
    "Montana Derby",
    "Kansas Mile",
    "Maine Maiden",
    "Utah Trophy",
]

SPORT_NAMES = [
    "Tennis",
    "Fencing",
    "Badminton",
    "Sportsketball",
    "Archery",
    "Caber Toss",
    "Football",
    "Soccer",
    "Competitive Crying",
    "Extreme Ironing",
    "Swimming",
    "Gymnastics",
    "Toe Wrestling",
    "Arguing",
]

LEVELS = ["Amateur", "Youth", "University", "Semi-Professional", "Professional", "International"]


def format_timestamp(dt: datetime) -> str:
    """RFC 3339 text in UTC with second precision, e.g. ``2021-03-02T15:04:05Z``."""
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _random_between(rng: random.Random, start: datetime, end: datetime) -> datetime:
    span = int((end - start).total_seconds())
    return start + timedelta(seconds=rng.randint(0, span))


def _base_columns(
    rng: random.Random, index: int, names: list[str], start: datetime, end: datetime
) -> tuple[Any, ...]:
    return (
        index,
        rng.randint(1, 10),
        rng.choice(names),
        rng.randint(1, 12),
        rng.randint(0, 1),
        format_timestamp(_random_between(rng, start, end)),
    )


def seed_races(
    conn: sqlite3.Connection,
    count: int = DEFAULT_SEED_COUNT,
    *,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> int:
    """Insert ``count`` races starting between two days ago and two days ahead."""
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    start, end = now - timedelta(days=2), now + timedelta(days=2)
    rows = [_base_columns(rng, i, RACE_NAMES, start, end) for i in range(1, count + 1)]
    conn.executemany(
        """
        INSERT OR IGNORE INTO races (id, meeting_id, name, number, visible, advertised_start_time)
        VALUES (?, ?, ?, ?, ?, ?)
        """,
        rows,
    )
    conn.commit()
    return len(rows)


def seed_events(
    conn: sqlite3.Connection,
    count: int = DEFAULT_SEED_COUNT,
    *,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> int:
    """Insert ``count`` events starting between a day ago and two days ahead."""
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    start, end = now - timedelta(days=1), now + timedelta(days=2)
    rows = [
        _base_columns(rng, i, SPORT_NAMES, start, end) + (rng.choice(LEVELS), rng.randint(0, 1))
        for i in range(1, count + 1)
    ]
    conn.executemany(
        """
        INSERT OR IGNORE INTO events
            (id, meeting_id, name, number, visible, advertised_start_time, level, sold_out)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        rows,
    )
    conn.commit()
    return len(rows)
