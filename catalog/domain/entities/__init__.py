from .event import Event
from .filter import ListFilter
from .race import Race
from .record import CatalogRecord

__all__ = [
    "CatalogRecord",
    "Event",
    "ListFilter",
    "Race",
]
