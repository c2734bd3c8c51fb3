"""
backend/oddsboard/models/board.py

Purpose:
    Derived, per-request results of the odds board pipeline. Nothing here is
    persisted; a result lives for one render/response cycle.

Dependencies:
    - pydantic
    - oddsboard.models.odds
    - oddsboard.models.schedule
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from oddsboard.models.odds import DevigResult, OddsRow, PriceSelection
from oddsboard.models.schedule import ScheduleEntry


class MarketSides(BaseModel):
    """Selected prices for both sides of one market."""

    first: PriceSelection | None = None
    second: PriceSelection | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def complete(self) -> bool:
        return self.first is not None and self.second is not None


class ConsensusRow(BaseModel):
    home: str
    away: str
    h2h_home: PriceSelection | None = None
    h2h_away: PriceSelection | None = None
    spread_home: PriceSelection | None = None
    spread_away: PriceSelection | None = None
    total_over: PriceSelection | None = None
    total_under: PriceSelection | None = None

    model_config = ConfigDict(frozen=True)


class ResolvedGame(BaseModel):
    entry: ScheduleEntry
    primary_row: OddsRow | None = None
    secondary_row: OddsRow | None = None
    moneyline: MarketSides = MarketSides()  # first = away, second = home
    spread: MarketSides = MarketSides()
    total: MarketSides = MarketSides()  # first = over, second = under
    consensus: ConsensusRow | None = None
    fair_probs: DevigResult | None = None  # prob_a = away, prob_b = home
    display: dict[str, str] = {}

    model_config = ConfigDict(frozen=True)

    @property
    def has_odds(self) -> bool:
        return self.primary_row is not None or self.secondary_row is not None

    @property
    def favorite_confidence(self) -> float | None:
        return self.fair_probs.favorite_confidence if self.fair_probs else None
