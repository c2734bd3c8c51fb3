"""
backend/oddsboard/models/schedule.py

Purpose:
    Normalized schedule entry shared by every schedule provider. Provider
    payloads are validated and coerced here so the matching core can assume
    well-typed input.

Dependencies:
    - pydantic
    - oddsboard.utils
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from oddsboard.utils import parse_utc

League = Literal["MLB", "NBA", "NHL", "WNBA", "NFL", "EPL", "MLS"]

LEAGUES: tuple[str, ...] = ("MLB", "NBA", "NHL", "WNBA", "NFL", "EPL", "MLS")
SOCCER_LEAGUES = frozenset({"EPL", "MLS"})


class ScheduleEntry(BaseModel):
    id: str | None = None
    league: League
    start_utc: datetime
    home: str
    away: str
    venue: str | None = None
    extra: dict[str, Any] = Field(default_factory=dict, repr=False)

    model_config = ConfigDict(frozen=True)

    @field_validator("league", mode="before")
    @classmethod
    def _league_upper(cls, value: Any) -> Any:
        return str(value or "").strip().upper()

    @field_validator("start_utc", mode="before")
    @classmethod
    def _start_utc(cls, value: Any) -> datetime:
        return parse_utc(value)

    @field_validator("home", "away", mode="before")
    @classmethod
    def _team_name(cls, value: Any) -> str:
        return str(value or "").strip() or "Unknown"

    @field_validator("id", mode="before")
    @classmethod
    def _id_str(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    @property
    def key(self) -> str:
        """Stable identity for one game within a request."""
        if self.id:
            return f"{self.league}:{self.id}"
        return f"{self.league}:{self.start_utc.isoformat()}:{self.away}@{self.home}"
