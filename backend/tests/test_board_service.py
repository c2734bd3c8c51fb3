"""
backend/tests/test_board_service.py

Purpose:
    Resolve-a-game pipeline end to end, the progressive odds board, and the
    streaming loader with slow and failing providers.
"""

from __future__ import annotations

import asyncio
import sys

import pytest

sys.path.insert(0, "backend")

from oddsboard.config import settings
from oddsboard.providers.base import OddsProvider, ProviderError, ScheduleProvider
from oddsboard.services.board_service import NOT_YET, OddsBoard, load_board, resolve_game, stream_board
from oddsboard.services.market_extractor import extract_best_or_consensus
from oddsboard.services.odds_matcher import match_odds_row
from oddsboard.services.probability import devig_two_way

from _odds_builders import h2h_book, make_row, spread_book, totals_book

HOME, AWAY = "New York Yankees", "Boston Red Sox"


def _yankees_row(home_price=-130, away_price=110, bookmaker="bookA"):
    return make_row(HOME, AWAY, "2024-07-01T23:00:00Z", [h2h_book(bookmaker, HOME, home_price, AWAY, away_price)])


def test_yankees_red_sox_end_to_end(yankees_red_sox):
    row = _yankees_row()
    assert match_odds_row(yankees_red_sox, [row]) is row

    home = extract_best_or_consensus(row, "h2h", "home", policy="best")
    assert home.price == -130

    fair = devig_two_way(-130, 110)
    assert fair.prob_a + fair.prob_b == pytest.approx(1.0, abs=1e-9)
    assert fair.prob_a == pytest.approx(0.543, abs=0.005)
    assert fair.prob_b == pytest.approx(0.457, abs=0.005)


def test_resolve_game_builds_display(yankees_red_sox):
    row = make_row(HOME, AWAY, "2024-07-01T23:00:00Z", [
        h2h_book("bookA", HOME, -130, AWAY, 110),
        spread_book("bookB", HOME, -1.5, 140, AWAY, 1.5, -160),
        totals_book("bookC", 8.5, -105, -115),
    ])
    game = resolve_game(yankees_red_sox, [row])

    assert game.has_odds
    assert game.primary_row is row
    assert game.display["moneyline"] == "+110 / -130"
    assert game.display["spread"] == "+1.5 (-160) / -1.5 (+140)"
    assert game.display["total"] == "O 8.5 (-105) / U 8.5 (-115)"
    assert game.display["fair"] == "46% / 54%"
    assert game.favorite_confidence == pytest.approx(game.fair_probs.prob_b)


def test_resolve_game_without_odds_says_not_yet(yankees_red_sox):
    game = resolve_game(yankees_red_sox, [], [])
    assert not game.has_odds
    assert set(game.display.values()) == {NOT_YET}
    assert game.fair_probs is None
    assert game.consensus is None


def test_resolve_game_falls_back_to_secondary(yankees_red_sox):
    espn = make_row("Yankees", "Red Sox", "2024-07-01T23:05:00Z", [h2h_book("ESPN BET", "Yankees", -125, "Red Sox", 105)])
    game = resolve_game(yankees_red_sox, [], [espn])
    assert game.primary_row is None
    assert game.secondary_row is espn
    assert game.moneyline.second.price == -125


def test_board_add_rows_replaces_source(yankees_red_sox):
    board = OddsBoard([yankees_red_sox])
    board.add_rows("the_odds_api", [_yankees_row(-140, 120)])
    board.add_rows("the_odds_api", [_yankees_row(-130, 110)])
    first = board.resolve()
    board.add_rows("the_odds_api", [_yankees_row(-130, 110)])

    assert board.sources == ["the_odds_api"]
    assert first[0].moneyline.second.price == -130
    assert board.resolve() == first


class _StaticOdds(OddsProvider):
    def __init__(self, name, rows, delay=0.0, error=None):
        self.name = name
        self._rows = rows
        self._delay = delay
        self._error = error

    async def get_odds(self, league, day):
        await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._rows


class _StaticSchedule(ScheduleProvider):
    name = "static"

    def __init__(self, entries):
        self._entries = entries

    async def fetch_by_date(self, league, day):
        return self._entries


@pytest.mark.asyncio
async def test_stream_board_yields_per_provider(yankees_red_sox):
    espn = _StaticOdds("espn", [make_row("Yankees", "Red Sox", "2024-07-01T23:05:00Z", [h2h_book("ESPN BET", "Yankees", -125, "Red Sox", 105)])], delay=0.05)
    odds_api = _StaticOdds("the_odds_api", [_yankees_row()], delay=0.0)

    snapshots = [s async for s in stream_board([yankees_red_sox], [espn, odds_api], "MLB", "2024-07-01", timeout=1.0)]

    assert len(snapshots) == 2
    assert snapshots[0][0].moneyline.second.price == -130
    assert snapshots[0][0].secondary_row is None
    assert snapshots[1][0].moneyline.second.price == -130
    assert snapshots[1][0].secondary_row is not None


@pytest.mark.asyncio
async def test_stream_board_survives_slow_and_failing_providers(yankees_red_sox):
    slow = _StaticOdds("slow", [_yankees_row()], delay=5.0)
    broken = _StaticOdds("broken", [], error=ProviderError("broken", "HTTP 500", 500))
    good = _StaticOdds("espn", [_yankees_row(-120, 100, "ESPN BET")])

    snapshots = [s async for s in stream_board([yankees_red_sox], [slow, broken, good], "MLB", "2024-07-01", timeout=0.05)]

    assert len(snapshots) == 3
    final = snapshots[-1][0]
    assert final.primary_row is None
    assert final.moneyline.second.price == -120


@pytest.mark.asyncio
async def test_load_board_returns_final_snapshot(yankees_red_sox):
    schedule = _StaticSchedule([yankees_red_sox])
    games = await load_board(schedule, [_StaticOdds("the_odds_api", [_yankees_row()])], "MLB", "2024-07-01", timeout=1.0)
    assert len(games) == 1
    assert games[0].display["moneyline"] == "+110 / -130"


@pytest.mark.asyncio
async def test_load_board_without_providers_is_unresolved(yankees_red_sox):
    games = await load_board(_StaticSchedule([yankees_red_sox]), [], "MLB", "2024-07-01")
    assert games[0].display["moneyline"] == NOT_YET


def test_consensus_policy_honours_min_sources_setting(yankees_red_sox, monkeypatch):
    rows = [_yankees_row(bookmaker="fanduel")]
    monkeypatch.setattr(settings, "CONSENSUS_MIN_SOURCES", 2)
    monkeypatch.setattr(settings, "ODDS_CONSENSUS_BOOKMAKERS", "fanduel,draftkings")
    assert resolve_game(yankees_red_sox, rows, policy="consensus").moneyline.second is None

    monkeypatch.setattr(settings, "CONSENSUS_MIN_SOURCES", 1)
    game = resolve_game(yankees_red_sox, rows, policy="consensus")
    assert game.moneyline.second.price == -130
    assert game.consensus.h2h_home.price == -130


class _Hanging(OddsProvider):
    name = "hanging"

    def __init__(self):
        self.cancelled = False

    async def get_odds(self, league, day):
        try:
            await asyncio.sleep(30)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return []


@pytest.mark.asyncio
async def test_stream_board_cancels_pending_fetches_when_consumer_stops(yankees_red_sox):
    hanging = _Hanging()
    board = stream_board([yankees_red_sox], [hanging, _StaticOdds("espn", [])], "MLB", "2024-07-01", timeout=60)

    first = await board.__anext__()
    await board.aclose()
    await asyncio.sleep(0.05)

    assert first[0].display["moneyline"] == NOT_YET
    assert hanging.cancelled
