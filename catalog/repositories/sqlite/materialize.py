from __future__ import annotations

import re
import sqlite3
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Sequence, TypeVar

from pydantic import ValidationError

from catalog.domain.entities import CatalogRecord
from catalog.domain.errors import StorageError
from catalog.domain.value_objects.enums import RecordStatus

R = TypeVar("R", bound=CatalogRecord)

# Fractional seconds of any precision; fromisoformat on 3.10 only takes 3 or 6 digits.
_FRACTION = re.compile(r"(?<=:\d\d)\.(\d+)")

# Column order every list query must select in.
RECORD_COLUMNS: tuple[str, ...] = (
    "id",
    "meeting_id",
    "name",
    "number",
    "visible",
    "advertised_start_time",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def derive_status(advertised_start_time: datetime, now: datetime) -> RecordStatus:
    """``CLOSED`` once ``now`` is strictly after the advertised start, else ``OPEN``."""
    if now > advertised_start_time:
        return RecordStatus.CLOSED
    return RecordStatus.OPEN


def parse_timestamp(value: Any) -> datetime:
    """Convert a stored timestamp to an aware UTC datetime.

    Accepts RFC 3339 / ISO 8601 text (``Z`` suffix included) or a
    ``datetime``. Fractional seconds of any precision are truncated to
    microseconds. Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"unsupported timestamp value: {value!r}")
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def decode_row(row: Sequence[Any], record_type: type[R], now: datetime) -> R:
    if len(row) != len(RECORD_COLUMNS):
        raise ValueError(f"expected {len(RECORD_COLUMNS)} columns, got {len(row)}")
    record_id, meeting_id, name, number, visible, raw_start = row
    if visible is None:
        raise ValueError("visible must not be NULL")
    advertised = parse_timestamp(raw_start)
    return record_type(
        id=record_id,
        meeting_id=meeting_id,
        name=name,
        number=number,
        visible=bool(visible),
        advertised_start_time=advertised,
        status=derive_status(advertised, now),
    )


def materialize(
    rows: Iterable[Sequence[Any]],
    record_type: type[R],
    now: datetime | Callable[[], datetime] = utcnow,
) -> list[R]:
    """Turn result rows into records, keeping the storage order.

    ``now`` is resolved once so every record in one call is judged against
    the same instant. Any undecodable row fails the whole call with
    :class:`StorageError`; an empty result is an empty list.
    """
    instant = now() if callable(now) else now
    out: list[R] = []
    try:
        for index, row in enumerate(rows):
            try:
                out.append(decode_row(row, record_type, instant))
            except (ValueError, TypeError, ValidationError) as exc:
                raise StorageError(
                    f"cannot decode {record_type.__name__.lower()} row {index}: {exc}"
                ) from exc
    except sqlite3.Error as exc:
        raise StorageError(f"reading {record_type.__name__.lower()} rows failed: {exc}") from exc
    return out
