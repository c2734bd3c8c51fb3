"""
backend/tests/test_espn_provider.py

Purpose:
    ESPN scoreboard provider: schedule entries, live filter, and the odds
    fallback rows built from competition odds.
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone

import httpx
import pytest

sys.path.insert(0, "backend")

import oddsboard.utils
from oddsboard.config import settings
from oddsboard.providers.espn import ESPNProvider, parse_competition_odds
from oddsboard.providers.http_client import ResilientClient


def _competition(state: str = "pre") -> dict:
    return {
        "date": "2024-07-01T23:05Z",
        "venue": {"fullName": "Yankee Stadium"},
        "status": {"type": {"state": state, "shortDetail": "7/1 - 7:05 PM EDT"}},
        "competitors": [
            {"homeAway": "home", "score": "0", "team": {"displayName": "New York Yankees"}},
            {"homeAway": "away", "score": "0", "team": {"displayName": "Boston Red Sox"}},
        ],
        "odds": [
            {
                "provider": {"name": "ESPN BET"},
                "moneylineHome": -130,
                "moneylineAway": 110,
                "spread": -1.5,
                "overUnder": 8.5,
                "overOdds": -105,
                "underOdds": -115,
                "homeTeamOdds": {"spreadOdds": 140},
                "awayTeamOdds": {"spreadOdds": -160},
            }
        ],
    }


def _scoreboard(*events) -> dict:
    return {"events": list(events)}


def _provider(handler) -> tuple[ESPNProvider, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = ResilientClient("espn", max_retries=0, base_delay=0, transport=httpx.MockTransport(record))
    return ESPNProvider(client=client), seen


def test_parse_competition_odds_builds_three_markets():
    books = parse_competition_odds(_competition()["odds"], "New York Yankees", "Boston Red Sox")
    assert len(books) == 1
    assert books[0]["bookmaker"] == "ESPN BET"
    markets = {m["key"]: m["outcomes"] for m in books[0]["markets"]}
    assert markets["h2h"] == [
        {"name": "Boston Red Sox", "price": 110},
        {"name": "New York Yankees", "price": -130},
    ]
    assert markets["spreads"][0] == {"name": "Boston Red Sox", "point": 1.5, "price": -160}
    assert markets["spreads"][1] == {"name": "New York Yankees", "point": -1.5, "price": 140}
    assert markets["totals"][0]["price"] == -105


def test_parse_competition_odds_without_lines_is_empty():
    assert parse_competition_odds([{"provider": {"name": "ESPN BET"}, "details": "OFF"}], "A", "B") == []
    assert parse_competition_odds([], "A", "B") == []


@pytest.mark.asyncio
async def test_fetch_by_date_builds_entries_and_caches():
    event = {"id": "401569001", "competitions": [_competition()]}
    provider, seen = _provider(lambda request: httpx.Response(200, json=_scoreboard(event)))

    entries = await provider.fetch_by_date("mlb", "2024-07-01")
    await provider.fetch_by_date("MLB", "20240701")

    assert len(seen) == 1
    assert seen[0].url.path.endswith("/baseball/mlb/scoreboard")
    assert seen[0].url.params["dates"] == "20240701"
    entry = entries[0]
    assert entry.key == "MLB:401569001"
    assert (entry.home, entry.away) == ("New York Yankees", "Boston Red Sox")
    assert entry.start_utc.hour == 23
    assert entry.venue == "Yankee Stadium"
    assert entry.extra["state"] == "pre"
    await provider.aclose()


@pytest.mark.asyncio
async def test_get_odds_returns_rows_with_sport_key():
    event = {"id": "401569001", "competitions": [_competition()]}
    provider, _ = _provider(lambda request: httpx.Response(200, json=_scoreboard(event)))

    rows = await provider.get_odds("MLB", "2024-07-01")

    assert len(rows) == 1
    assert rows[0].sport_key == "baseball_mlb"
    assert rows[0].books[0].source == "espn bet"
    assert rows[0].books[0].market("totals").outcomes[1].price == -115
    await provider.aclose()


@pytest.mark.asyncio
async def test_fetch_live_keeps_in_progress_games():
    live = {"id": "1", "competitions": [_competition("in")]}
    done = {"id": "2", "competitions": [_competition("post")]}
    provider, _ = _provider(lambda request: httpx.Response(200, json=_scoreboard(live, done)))

    entries = await provider.fetch_live("MLB")

    assert [e.id for e in entries] == ["1"]
    await provider.aclose()


@pytest.mark.asyncio
async def test_upstream_failure_is_an_empty_schedule():
    provider, _ = _provider(lambda request: httpx.Response(503, json={}))
    assert await provider.fetch_by_date("NBA", "2025-01-15") == []
    assert await provider.fetch_by_date("CRICKET", "2025-01-15") == []
    await provider.aclose()


def test_null_moneyline_falls_back_to_team_odds():
    odds = [{
        "provider": {"name": "ESPN BET"},
        "moneylineAway": None,
        "moneylineHome": None,
        "awayTeamOdds": {"moneyLine": 115},
        "homeTeamOdds": {"moneyLine": -135},
    }]
    books = parse_competition_odds(odds, "New York Yankees", "Boston Red Sox")
    assert books[0]["markets"][0]["outcomes"] == [
        {"name": "Boston Red Sox", "price": 115},
        {"name": "New York Yankees", "price": -135},
    ]


@pytest.mark.asyncio
async def test_fetch_live_uses_display_timezone_day(monkeypatch):
    # 21:30 in New York on July 1 is already July 2 in UTC.
    monkeypatch.setattr(oddsboard.utils, "utcnow", lambda: datetime(2024, 7, 2, 1, 30, tzinfo=timezone.utc))
    monkeypatch.setattr(settings, "DISPLAY_TIMEZONE", "America/New_York")
    provider, seen = _provider(lambda request: httpx.Response(200, json=_scoreboard()))

    await provider.fetch_live("MLB")

    assert [request.url.params["dates"] for request in seen] == ["20240701"]
    await provider.aclose()
