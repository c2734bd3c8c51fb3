"""
backend/oddsboard/services/board_service.py

Purpose:
    "Resolve odds for this game" pipeline composed from the matcher, the
    extractor, the consensus service and the probability deriver, plus the
    progressive board that re-resolves every game as each odds provider's
    rows arrive.

Dependencies:
    - asyncio
    - oddsboard.services.odds_matcher
    - oddsboard.services.market_extractor
    - oddsboard.services.consensus_service
    - oddsboard.services.probability
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable, Sequence
from datetime import date

from oddsboard.config import settings
from oddsboard.models.board import MarketSides, ResolvedGame
from oddsboard.models.odds import OddsRow, PriceSelection
from oddsboard.models.schedule import ScheduleEntry
from oddsboard.providers.base import OddsProvider, ScheduleProvider
from oddsboard.services.consensus_service import SECONDARY_SOURCE, consensus_row
from oddsboard.services.market_extractor import extract_best_or_consensus
from oddsboard.services.odds_matcher import match_odds_row
from oddsboard.services.probability import devig_two_way
from oddsboard.utils.odds_utils import format_american, format_pct, format_point

logger = logging.getLogger("oddsboard.board")

NOT_YET = "not yet"


def _fmt_price(selection: PriceSelection | None) -> str:
    return format_american(selection.price) if selection else NOT_YET


def _display(moneyline: MarketSides, spread: MarketSides, total: MarketSides, fair) -> dict[str, str]:
    out = {"moneyline": NOT_YET, "spread": NOT_YET, "total": NOT_YET, "fair": NOT_YET}
    if moneyline.complete:
        out["moneyline"] = f"{_fmt_price(moneyline.first)} / {_fmt_price(moneyline.second)}"
    if spread.complete:
        away, home = spread.first, spread.second
        out["spread"] = (
            f"{format_point(away.point)} ({_fmt_price(away)}) / "
            f"{format_point(home.point)} ({_fmt_price(home)})"
        )
    if total.complete:
        over, under = total.first, total.second
        out["total"] = (
            f"O {format_point(over.point)} ({_fmt_price(over)}) / "
            f"U {format_point(under.point)} ({_fmt_price(under)})"
        )
    if fair is not None:
        out["fair"] = f"{format_pct(fair.prob_a)} / {format_pct(fair.prob_b)}"
    return out


def resolve_game(
    entry: ScheduleEntry,
    primary_rows: Sequence[OddsRow] | None,
    secondary_rows: Sequence[OddsRow] | None = None,
    policy: str = "best",
) -> ResolvedGame:
    """Match, extract and de-vig odds for one scheduled game.

    Prices come from the primary (aggregator) row, falling back to the
    secondary (ESPN) row when the aggregator has nothing for this game.
    """
    league = entry.league
    primary = match_odds_row(entry, primary_rows, league)
    secondary = match_odds_row(entry, secondary_rows, league)
    source = primary or secondary

    def pick(market: str, side: str) -> PriceSelection | None:
        return extract_best_or_consensus(
            source, market, side, policy=policy, league=league, min_sources=settings.CONSENSUS_MIN_SOURCES,
        )

    moneyline = MarketSides(first=pick("h2h", "away"), second=pick("h2h", "home"))
    spread = MarketSides(first=pick("spreads", "away"), second=pick("spreads", "home"))
    total = MarketSides(first=pick("totals", "over"), second=pick("totals", "under"))
    fair = None
    if moneyline.complete:
        fair = devig_two_way(moneyline.first.price, moneyline.second.price)

    return ResolvedGame(
        entry=entry,
        primary_row=primary,
        secondary_row=secondary,
        moneyline=moneyline,
        spread=spread,
        total=total,
        consensus=consensus_row(league, primary, secondary),
        fair_probs=fair,
        display=_display(moneyline, spread, total, fair),
    )


class OddsBoard:
    """Per-request accumulator of odds rows, keyed by provider name.

    ``add_rows`` replaces what a provider contributed before, so feeding the
    board a provider's latest (superset) result is idempotent.
    """

    def __init__(self, entries: Iterable[ScheduleEntry], secondary_source: str = SECONDARY_SOURCE, policy: str = "best"):
        self.entries = list(entries)
        self.secondary_source = secondary_source
        self.policy = policy
        self._rows: dict[str, list[OddsRow]] = {}

    def add_rows(self, source: str, rows: Iterable[OddsRow] | None) -> None:
        self._rows[source] = list(rows or ())

    @property
    def sources(self) -> list[str]:
        return list(self._rows)

    def _primary_rows(self) -> list[OddsRow]:
        rows: list[OddsRow] = []
        for source, source_rows in self._rows.items():
            if source != self.secondary_source:
                rows.extend(source_rows)
        return rows

    def resolve(self) -> list[ResolvedGame]:
        primary = self._primary_rows()
        secondary = self._rows.get(self.secondary_source, [])
        return [resolve_game(entry, primary, secondary, self.policy) for entry in self.entries]


async def _fetch_rows(provider: OddsProvider, league: str, day: str | date, timeout: float) -> tuple[str, list[OddsRow]]:
    try:
        rows = await asyncio.wait_for(provider.get_odds(league, day), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("%s: no odds within %.1fs for %s, continuing without", provider.name, timeout, league)
        rows = []
    except Exception as e:
        logger.error("%s: odds fetch failed for %s: %s", provider.name, league, e)
        rows = []
    return provider.name, rows


async def stream_board(
    entries: Sequence[ScheduleEntry],
    providers: Sequence[OddsProvider],
    league: str,
    day: str | date,
    timeout: float | None = None,
    policy: str = "best",
) -> AsyncIterator[list[ResolvedGame]]:
    """Yield a resolved snapshot every time one provider's rows arrive.

    Providers run concurrently; each gets at most ``timeout`` seconds, after
    which the board proceeds with what it has. Fetches still running when the
    consumer stops iterating are cancelled.
    """
    wait = settings.PROVIDER_WAIT_SECONDS if timeout is None else timeout
    board = OddsBoard(entries, policy=policy)
    tasks = [asyncio.create_task(_fetch_rows(p, league, day, wait)) for p in providers]
    try:
        for next_done in asyncio.as_completed(tasks):
            name, rows = await next_done
            board.add_rows(name, rows)
            logger.debug("%s delivered %d rows for %s", name, len(rows), league)
            yield board.resolve()
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()


async def load_board(
    schedule: ScheduleProvider,
    providers: Sequence[OddsProvider],
    league: str,
    day: str | date,
    timeout: float | None = None,
    policy: str = "best",
) -> list[ResolvedGame]:
    """Fetch a day's schedule and return the board once every provider settled."""
    entries = await schedule.fetch_by_date(league, day)
    resolved = [resolve_game(entry, [], [], policy) for entry in entries]
    async for snapshot in stream_board(entries, providers, league, day, timeout, policy):
        resolved = snapshot
    return resolved
