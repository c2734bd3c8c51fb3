"""
backend/oddsboard/services/consensus_service.py

Purpose:
    Corroborate aggregator prices against the ESPN feed. Whitelisted
    aggregator books and the ESPN row (one source, "espn") are pooled, then
    the consensus policy of the market extractor runs per market side.

Dependencies:
    - oddsboard.config
    - oddsboard.services.market_extractor
"""

from __future__ import annotations

from collections.abc import Iterable

from oddsboard.config import csv_setting, settings
from oddsboard.models.board import ConsensusRow
from oddsboard.models.odds import Book, OddsRow
from oddsboard.services.market_extractor import extract_best_or_consensus

SECONDARY_SOURCE = "espn"


def pooled_row(
    primary: OddsRow | None,
    secondary: OddsRow | None,
    bookmakers: Iterable[str] | None = None,
) -> OddsRow | None:
    """Merge both rows' books into one row named after the primary's teams."""
    if primary is None and secondary is None:
        return None
    allowed = {b.lower() for b in (bookmakers if bookmakers is not None else csv_setting(settings.ODDS_CONSENSUS_BOOKMAKERS))}
    base = primary or secondary

    books: list[Book] = []
    if primary is not None:
        books.extend(b for b in primary.books if b.source in allowed)
    if secondary is not None:
        books.extend(Book(bookmaker=SECONDARY_SOURCE, markets=b.markets) for b in secondary.books)
    return OddsRow(
        sport_key=base.sport_key,
        start=base.start,
        home=base.home,
        away=base.away,
        books=tuple(books),
    )


def consensus_row(
    league: str,
    primary: OddsRow | None,
    secondary: OddsRow | None,
    bookmakers: Iterable[str] | None = None,
    min_sources: int | None = None,
) -> ConsensusRow | None:
    """Consensus prices for every market side, or None without any row."""
    row = pooled_row(primary, secondary, bookmakers)
    if row is None:
        return None
    need = settings.CONSENSUS_MIN_SOURCES if min_sources is None else min_sources

    def pick(market: str, side: str):
        return extract_best_or_consensus(row, market, side, policy="consensus", league=league, min_sources=need)

    return ConsensusRow(
        home=row.home,
        away=row.away,
        h2h_home=pick("h2h", "home"),
        h2h_away=pick("h2h", "away"),
        spread_home=pick("spreads", "home"),
        spread_away=pick("spreads", "away"),
        total_over=pick("totals", "over"),
        total_under=pick("totals", "under"),
    )
