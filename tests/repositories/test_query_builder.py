from __future__ import annotations

import pytest

from catalog.domain.entities import ListFilter
from catalog.domain.errors import InvalidFilter
from catalog.domain.value_objects.enums import SortDirection, SortField
from catalog.repositories.sqlite.query import (
    DEFAULT_SORTABLE,
    build_list_query,
    build_order_by,
    resolve_sort_field,
)

BASE = "SELECT * FROM items"


def test_none_filter_returns_base_query_unchanged() -> None:
    sql, args = build_list_query(BASE, None)
    assert sql == BASE
    assert args == ()


def test_meeting_ids_and_visible_only() -> None:
    sql, args = build_list_query(BASE, ListFilter(meeting_ids=[1, 2], visible_only=True))
    assert sql == (
        "SELECT * FROM items WHERE meeting_id IN (?,?) AND visible = ? "
        "ORDER BY advertised_start_time DESC"
    )
    assert args == (1, 2, True)


def test_empty_filter_has_no_where_clause() -> None:
    sql, args = build_list_query(BASE, ListFilter())
    assert "WHERE" not in sql
    assert sql == "SELECT * FROM items ORDER BY advertised_start_time DESC"
    assert args == ()


def test_visible_false_places_no_constraint() -> None:
    sql, args = build_list_query(BASE, ListFilter(visible_only=False, meeting_ids=[]))
    assert "visible" not in sql
    assert args == ()


@pytest.mark.parametrize("ids", [[7], [3, 1, 2], list(range(1, 21))])
def test_placeholder_count_matches_meeting_ids(ids: list[int]) -> None:
    sql, args = build_list_query(BASE, ListFilter(meeting_ids=ids))
    in_clause = sql[sql.index("IN (") + 4 : sql.index(")")]
    assert in_clause.split(",") == ["?"] * len(ids)
    assert sql.count("?") == len(args)
    assert list(args) == ids


def test_visible_only_alone() -> None:
    sql, args = build_list_query(BASE, ListFilter(visible_only=True))
    assert sql == "SELECT * FROM items WHERE visible = ? ORDER BY advertised_start_time DESC"
    assert args == (True,)


def test_sort_by_number_ascending() -> None:
    sql, _ = build_list_query(BASE, ListFilter(sort_by="number", order="asc"))
    assert sql.endswith(" ORDER BY number ASC")


@pytest.mark.parametrize(
    ("order", "expected"),
    [
        ("ASC", "ASC"),
        ("asc", "ASC"),
        ("Ascending", "ASC"),
        ("ASCENDING", "ASC"),
        ("DESC", "DESC"),
        ("descending", "DESC"),
        ("", "DESC"),
        ("up", "DESC"),
        ("ASC; DROP TABLE items", "DESC"),
    ],
)
def test_direction(order: str, expected: str) -> None:
    sql, _ = build_list_query(BASE, ListFilter(order=order))
    assert sql.endswith(f"ORDER BY advertised_start_time {expected}")
    assert sql.count("ORDER BY") == 1


def test_sort_by_is_lowercased() -> None:
    sql, _ = build_list_query(BASE, ListFilter(sort_by="Meeting_ID"))
    assert sql.endswith("ORDER BY meeting_id DESC")


@pytest.mark.parametrize(
    "sort_by",
    ["level", "price", "name; DROP TABLE items", "name DESC", "advertised_start_time--"],
)
def test_unknown_sort_by_is_rejected(sort_by: str) -> None:
    with pytest.raises(InvalidFilter) as excinfo:
        build_list_query(BASE, ListFilter(sort_by=sort_by, meeting_ids=[1]))
    assert excinfo.value.field == "sort_by"
    assert isinstance(excinfo.value, ValueError)


def test_extra_sortable_columns_are_honoured() -> None:
    sortable = DEFAULT_SORTABLE | {SortField.LEVEL}
    sql, _ = build_list_query(BASE, ListFilter(sort_by="level", order="asc"), sortable)
    assert sql.endswith("ORDER BY level ASC")


def test_resolve_sort_field_default() -> None:
    assert resolve_sort_field("") is SortField.ADVERTISED_START_TIME
    assert resolve_sort_field(None) is SortField.ADVERTISED_START_TIME
    assert resolve_sort_field("NAME") is SortField.NAME


def test_build_order_by() -> None:
    assert build_order_by("id", "ascending") == "ORDER BY id ASC"
    assert build_order_by("", None) == "ORDER BY advertised_start_time DESC"


def test_sort_direction_parse() -> None:
    assert SortDirection.parse("asc") is SortDirection.ASC
    assert SortDirection.parse(None) is SortDirection.DESC


def test_filter_is_not_mutated() -> None:
    flt = ListFilter(meeting_ids=[2, 1], visible_only=True, sort_by="NAME", order="asc")
    before = flt.model_dump()
    build_list_query(BASE, flt)
    assert flt.model_dump() == before
