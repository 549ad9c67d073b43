from enum import Enum


class RecordStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, token: str | None) -> "SortDirection":
        """Map a caller supplied order token to a direction.

        ``ASC`` and ``ASCENDING`` (any case) mean ascending; everything else,
        including an empty token, means descending.
        """
        if (token or "").upper() in {"ASC", "ASCENDING"}:
            return cls.ASC
        return cls.DESC


class SortField(str, Enum):
    """Columns a list query may be ordered by."""

    ID = "id"
    MEETING_ID = "meeting_id"
    NAME = "name"
    NUMBER = "number"
    VISIBLE = "visible"
    ADVERTISED_START_TIME = "advertised_start_time"
    LEVEL = "level"
    SOLD_OUT = "sold_out"
