from typing import NewType

RaceId = NewType("RaceId", int)
EventId = NewType("EventId", int)
MeetingId = NewType("MeetingId", int)

# Identifiers are stored as signed 64-bit SQLite integers.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
