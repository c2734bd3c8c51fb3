from abc import ABC, abstractmethod
from datetime import date

from oddsboard.models.odds import OddsRow
from oddsboard.models.schedule import ScheduleEntry


class ProviderError(Exception):
    """An external data source answered with something unusable."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        super().__init__(f"[{provider}] {message}")
        self.provider = provider
        self.status_code = status_code


class ScheduleProvider(ABC):
    """Abstract base class for schedule sources."""

    name: str = "schedule"

    @abstractmethod
    async def fetch_by_date(self, league: str, day: str | date) -> list[ScheduleEntry]:
        """Fetch the games of one league on one calendar day.

        Returns normalized entries; an empty list when the source has nothing
        or is unavailable.
        """
        ...

    async def fetch_live(self, league: str) -> list[ScheduleEntry]:
        """In-progress games. Sources without a live feed return nothing."""
        return []


class OddsProvider(ABC):
    """Abstract base class for odds sources."""

    name: str = "odds"

    @abstractmethod
    async def get_odds(self, league: str, day: str | date) -> list[OddsRow]:
        """Fetch odds rows for one league on one calendar day.

        Provider failures surface as an empty (or stale) list, never as an
        exception to the caller.
        """
        ...
