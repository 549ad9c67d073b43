from .racing_service import RacingService
from .sports_service import SportsService

__all__ = [
    "RacingService",
    "SportsService",
]
