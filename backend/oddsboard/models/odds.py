"""
backend/oddsboard/models/odds.py

Purpose:
    Normalized odds shapes (row -> book -> market -> outcome) produced by odds
    providers, plus the small derived result types of the extractor and the
    probability deriver.

Dependencies:
    - pydantic
    - oddsboard.utils
    - oddsboard.utils.odds_utils
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from oddsboard.utils import parse_utc
from oddsboard.utils.odds_utils import to_american_price, to_point

MarketKey = Literal["h2h", "spreads", "totals"]
MARKET_KEYS: tuple[str, ...] = ("h2h", "spreads", "totals")


class Outcome(BaseModel):
    name: str = ""
    price: int | None = None
    point: float | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> str:
        return str(value or "").strip()

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value: Any) -> int | None:
        # 0, NaN, inf and junk are all "no price" rather than a parse error.
        return to_american_price(value)

    @field_validator("point", mode="before")
    @classmethod
    def _point(cls, value: Any) -> float | None:
        return to_point(value)


class Market(BaseModel):
    key: MarketKey
    outcomes: tuple[Outcome, ...] = ()

    model_config = ConfigDict(frozen=True)


class Book(BaseModel):
    bookmaker: str
    markets: tuple[Market, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _bookmaker_alias(cls, data: Any) -> Any:
        # The Odds API calls it key/title, ESPN uses provider.name.
        if isinstance(data, dict) and not data.get("bookmaker"):
            data = {**data, "bookmaker": data.get("key") or data.get("title") or "unknown"}
        return data

    @field_validator("markets", mode="before")
    @classmethod
    def _known_markets(cls, value: Any) -> Any:
        if not value:
            return ()
        kept = []
        for market in value:
            key = market.get("key") if isinstance(market, dict) else getattr(market, "key", None)
            if key in MARKET_KEYS:
                kept.append(market)
        return tuple(kept)

    @property
    def source(self) -> str:
        """Identity used when counting independent sources."""
        return self.bookmaker.strip().lower()

    def market(self, key: str) -> Market | None:
        for market in self.markets:
            if market.key == key:
                return market
        return None


class OddsRow(BaseModel):
    sport_key: str | None = None
    start: datetime | None = None
    home: str
    away: str
    books: tuple[Book, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("start", mode="before")
    @classmethod
    def _start(cls, value: Any) -> datetime | None:
        if value is None or value == "":
            return None
        try:
            return parse_utc(value)
        except (TypeError, ValueError):
            return None

    @field_validator("home", "away", mode="before")
    @classmethod
    def _team(cls, value: Any) -> str:
        return str(value or "").strip()


class PriceSelection(BaseModel):
    """One selected price for a market side, with the sources behind it."""

    price: int
    point: float | None = None
    book: str
    sources: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class DevigResult(BaseModel):
    prob_a: float
    prob_b: float

    model_config = ConfigDict(frozen=True)

    @property
    def favorite_confidence(self) -> float:
        return max(self.prob_a, self.prob_b)
