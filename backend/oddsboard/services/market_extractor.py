"""
backend/oddsboard/services/market_extractor.py

Purpose:
    Pick one representative price per market side from a matched odds row.

    Two selection policies:
      - "best": the most favorable price for the bettor across books, i.e.
        the lowest implied probability. Signed American prices are never
        compared directly; they are not monotonic across +/-100.
      - "consensus": cluster candidates by (point, price) and return the
        largest cluster when at least ``min_sources`` distinct sources agree.

Dependencies:
    - re
    - oddsboard.services.team_canonicalizer
    - oddsboard.services.probability
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from oddsboard.models.odds import Book, OddsRow, Outcome, PriceSelection
from oddsboard.services.probability import implied_probability
from oddsboard.services.team_canonicalizer import canonicalize

logger = logging.getLogger("oddsboard.market_extractor")

Side = Literal["home", "away", "over", "under"]
Policy = Literal["best", "consensus"]

_TEAM_SIDES = ("home", "away")
_TOTAL_SIDES = {
    "over": re.compile(r"^over$", re.IGNORECASE),
    "under": re.compile(r"^under$", re.IGNORECASE),
}


@dataclass(frozen=True)
class _Candidate:
    price: int
    point: float | None
    source: str


def _validate(market: str, side: str, policy: str) -> None:
    if market in ("h2h", "spreads"):
        if side not in _TEAM_SIDES:
            raise ValueError(f"side must be home/away for {market}, got {side!r}")
    elif market == "totals":
        if side not in _TOTAL_SIDES:
            raise ValueError(f"side must be over/under for totals, got {side!r}")
    else:
        raise ValueError(f"unknown market {market!r}")
    if policy not in ("best", "consensus"):
        raise ValueError(f"unknown selection policy {policy!r}")


def _side_outcome(
    book: Book,
    market: str,
    side: str,
    target: str,
    league: str | None,
) -> Outcome | None:
    """First priced outcome for the side in this book's market, if any."""
    book_market = book.market(market)
    if book_market is None:
        return None
    for outcome in book_market.outcomes:
        if outcome.price is None:
            continue
        if market == "totals":
            if _TOTAL_SIDES[side].match(outcome.name.strip()):
                return outcome
        elif outcome.name and canonicalize(outcome.name, league) == target:
            return outcome
    return None


def collect_candidates(
    row: OddsRow,
    market: str,
    side: str,
    league: str | None = None,
) -> list[_Candidate]:
    """One candidate price per book, in book order."""
    league = league or row.sport_key
    target = ""
    if market != "totals":
        target = canonicalize(row.home if side == "home" else row.away, league)
        if not target:
            return []

    candidates: list[_Candidate] = []
    for book in row.books:
        outcome = _side_outcome(book, market, side, target, league)
        if outcome is not None:
            candidates.append(_Candidate(price=outcome.price, point=outcome.point, source=book.source))
    return candidates


def _select_best(candidates: Iterable[_Candidate]) -> PriceSelection | None:
    best: _Candidate | None = None
    best_prob = 2.0
    for candidate in candidates:
        prob = implied_probability(candidate.price)
        if prob is None:
            continue
        if prob < best_prob:
            best, best_prob = candidate, prob
    if best is None:
        return None
    return PriceSelection(price=best.price, point=best.point, book=best.source, sources=(best.source,))


def _select_consensus(candidates: list[_Candidate], min_sources: int) -> PriceSelection | None:
    clusters: dict[tuple[float | None, int], list[_Candidate]] = {}
    for candidate in candidates:
        clusters.setdefault((candidate.point, candidate.price), []).append(candidate)
    if not clusters:
        return None

    # dicts keep insertion order and max() keeps the first maximum, so equal
    # clusters resolve to the one seen first.
    def _distinct_sources(members: list[_Candidate]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(m.source for m in members))

    top = max(clusters.values(), key=lambda members: len(_distinct_sources(members)))
    sources = _distinct_sources(top)
    if len(sources) < max(1, min_sources):
        return None
    first = top[0]
    return PriceSelection(price=first.price, point=first.point, book=first.source, sources=sources)


def extract_best_or_consensus(
    row: OddsRow | None,
    market: str,
    side: str,
    policy: str = "best",
    league: str | None = None,
    min_sources: int = 2,
) -> PriceSelection | None:
    """Representative price for one market side of ``row``, or None.

    Never raises for missing or malformed data; raises ValueError only for an
    invalid market/side/policy combination.
    """
    _validate(market, side, policy)
    if row is None:
        return None
    candidates = collect_candidates(row, market, side, league)
    if not candidates:
        return None
    if policy == "best":
        return _select_best(candidates)
    selection = _select_consensus(candidates, min_sources)
    if selection is None:
        logger.debug(
            "No %s/%s consensus for %s @ %s among %d prices",
            market, side, row.away, row.home, len(candidates),
        )
    return selection
