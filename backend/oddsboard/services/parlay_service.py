"""Parlay slip: collect legs from the board and price the combination."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from oddsboard.services.probability import combine_parlay, parlay_payout
from oddsboard.utils.odds_utils import to_american_price

LegMarket = Literal["ML", "Spread", "Total"]
LegSide = Literal["away", "home", "over", "under"]


class ParlayLeg(BaseModel):
    id: str
    league: str
    start: datetime
    away: str
    home: str
    market: LegMarket
    side: LegSide
    price: int
    point: float | None = None
    book: str | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value):
        price = to_american_price(value)
        if price is None:
            raise ValueError("leg needs a valid American price")
        return price


class ParlaySummary(BaseModel):
    legs: int
    american: int | None
    decimal: float
    implied: float
    payout: float | None


class ParlaySlip:
    def __init__(self) -> None:
        self._legs: list[ParlayLeg] = []

    @property
    def legs(self) -> list[ParlayLeg]:
        return list(self._legs)

    def add(self, leg: ParlayLeg) -> bool:
        """Add a leg; a leg id already on the slip is ignored."""
        if any(existing.id == leg.id for existing in self._legs):
            return False
        self._legs.append(leg)
        return True

    def remove(self, leg_id: str) -> None:
        self._legs = [leg for leg in self._legs if leg.id != leg_id]

    def clear(self) -> None:
        self._legs = []

    def summarize(self, stake: float = 100.0) -> ParlaySummary | None:
        prices = [leg.price for leg in self._legs]
        price = combine_parlay(prices)
        if price is None:
            return None
        return ParlaySummary(
            legs=len(self._legs),
            american=price.american,
            decimal=price.decimal,
            implied=price.implied,
            payout=parlay_payout(prices, stake),
        )
