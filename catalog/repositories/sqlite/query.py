"""Builds parameterized list queries from a :class:`ListFilter`.

Example:
    >>> from catalog.domain.entities import ListFilter
    >>> build_list_query(
    ...     "SELECT * FROM items", ListFilter(meeting_ids=[1, 2], visible_only=True)
    ... )
    QueryFragment(sql='SELECT * FROM items WHERE meeting_id IN (?,?) AND visible = ? ORDER BY advertised_start_time DESC', args=(1, 2, True))
"""

from __future__ import annotations

from typing import AbstractSet, Any, NamedTuple, Optional

from catalog.domain.entities import ListFilter
from catalog.domain.errors import InvalidFilter
from catalog.domain.value_objects.enums import SortDirection, SortField

DEFAULT_SORT_FIELD = SortField.ADVERTISED_START_TIME

# Columns present in every catalog table.
DEFAULT_SORTABLE: frozenset[SortField] = frozenset(
    {
        SortField.ID,
        SortField.MEETING_ID,
        SortField.NAME,
        SortField.NUMBER,
        SortField.VISIBLE,
        SortField.ADVERTISED_START_TIME,
    }
)

# ORDER BY cannot take placeholders, so only these literals ever reach the SQL text.
_SORT_FIELD_SQL: dict[SortField, str] = {field: field.value for field in SortField}
_DIRECTION_SQL: dict[SortDirection, str] = {
    SortDirection.ASC: "ASC",
    SortDirection.DESC: "DESC",
}


class QueryFragment(NamedTuple):
    """SQL text with ``?`` placeholders and the values bound to them, in order."""

    sql: str
    args: tuple[Any, ...]


def resolve_sort_field(
    sort_by: Optional[str], sortable: AbstractSet[SortField] = DEFAULT_SORTABLE
) -> SortField:
    """Validate a caller supplied sort column against ``sortable``.

    An empty value selects :data:`DEFAULT_SORT_FIELD`. Anything not on the
    allow-list raises :class:`InvalidFilter`.
    """
    name = (sort_by or "").lower()
    if not name:
        return DEFAULT_SORT_FIELD
    try:
        field = SortField(name)
    except ValueError:
        field = None
    if field is None or field not in sortable:
        allowed = ", ".join(sorted(f.value for f in sortable))
        raise InvalidFilter(
            f"cannot sort by {sort_by!r}; expected one of: {allowed}", field="sort_by"
        )
    return field


def build_order_by(
    sort_by: Optional[str],
    order: Optional[str],
    sortable: AbstractSet[SortField] = DEFAULT_SORTABLE,
) -> str:
    field = resolve_sort_field(sort_by, sortable)
    direction = SortDirection.parse(order)
    return f"ORDER BY {_SORT_FIELD_SQL[field]} {_DIRECTION_SQL[direction]}"


def build_list_query(
    base_query: str,
    flt: Optional[ListFilter],
    sortable: AbstractSet[SortField] = DEFAULT_SORTABLE,
) -> QueryFragment:
    """Apply ``flt`` to ``base_query``.

    - ``None`` filter: the base query is returned untouched with no arguments.
    - ``meeting_ids``: ``meeting_id IN (?,...)`` with one placeholder per id.
    - ``visible_only``: ``visible = ?`` bound to ``True``.
    - An ``ORDER BY`` clause is always appended otherwise.

    :raises InvalidFilter: if ``flt.sort_by`` is not in ``sortable``.
    """
    if flt is None:
        return QueryFragment(base_query, ())

    clauses: list[str] = []
    args: list[Any] = []

    if flt.meeting_ids:
        placeholders = ",".join("?" for _ in flt.meeting_ids)
        clauses.append(f"meeting_id IN ({placeholders})")
        args.extend(flt.meeting_ids)

    # False or omitted means every entity regardless of visibility.
    if flt.visible_only:
        clauses.append("visible = ?")
        args.append(True)

    # Validate before touching the SQL so a rejected filter builds nothing.
    order_by = build_order_by(flt.sort_by, flt.order, sortable)

    sql = base_query
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    sql += " " + order_by

    return QueryFragment(sql, tuple(args))
