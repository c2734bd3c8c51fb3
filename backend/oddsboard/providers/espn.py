import logging
import time
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from oddsboard.config import settings
from oddsboard.config_leagues import ESPN_PATHS, ODDS_API_SPORT_KEYS
from oddsboard.models.odds import OddsRow
from oddsboard.models.schedule import ScheduleEntry
from oddsboard.providers.base import OddsProvider, ScheduleProvider
from oddsboard.providers.http_client import ResilientClient
from oddsboard.utils import local_today, parse_day

logger = logging.getLogger("oddsboard.espn")


def _competitors(comp: dict) -> tuple[dict, dict]:
    """(home, away) competitor dicts; falls back to list order when unlabeled."""
    competitors = comp.get("competitors") or []
    home = next((c for c in competitors if c.get("homeAway") == "home"), None)
    away = next((c for c in competitors if c.get("homeAway") == "away"), None)
    if home is None and competitors:
        home = competitors[0]
    if away is None and len(competitors) > 1:
        away = competitors[1]
    return home or {}, away or {}


def _team_name(competitor: dict) -> str:
    team = competitor.get("team") or {}
    return team.get("displayName") or team.get("name") or team.get("abbreviation") or ""


def _side_odds(odds: dict, side: str, field: str) -> Any:
    team_odds = odds.get(f"{side}TeamOdds") or {}
    return team_odds.get(field)


def _first_present(*values: Any) -> Any:
    """First value that is not None; ESPN sends explicit nulls for unposted lines."""
    return next((v for v in values if v is not None), None)


def parse_competition_odds(odds_list: list[dict], home: str, away: str) -> list[dict]:
    """ESPN competition odds -> book dicts (moneyline, spread, over/under)."""
    books = []
    for odds in odds_list or []:
        provider = odds.get("provider") or {}
        bookmaker = provider.get("name") or provider.get("displayName") or "ESPN"
        markets = []

        ml_away = _first_present(odds.get("moneylineAway"), _side_odds(odds, "away", "moneyLine"))
        ml_home = _first_present(odds.get("moneylineHome"), _side_odds(odds, "home", "moneyLine"))
        if ml_away is not None and ml_home is not None:
            markets.append({"key": "h2h", "outcomes": [
                {"name": away, "price": ml_away},
                {"name": home, "price": ml_home},
            ]})

        spread = odds.get("spread")
        if isinstance(spread, (int, float)) or (isinstance(spread, str) and spread.strip()):
            try:
                line = float(spread)
            except ValueError:
                line = None
            if line is not None:
                # ESPN quotes the spread from the home side.
                markets.append({"key": "spreads", "outcomes": [
                    {"name": away, "point": -line, "price": _side_odds(odds, "away", "spreadOdds")},
                    {"name": home, "point": line, "price": _side_odds(odds, "home", "spreadOdds")},
                ]})

        over_under = odds.get("overUnder")
        if over_under is not None:
            markets.append({"key": "totals", "outcomes": [
                {"name": "Over", "point": over_under, "price": odds.get("overOdds")},
                {"name": "Under", "point": over_under, "price": odds.get("underOdds")},
            ]})

        if markets:
            books.append({"bookmaker": bookmaker, "markets": markets})
    return books


class ESPNProvider(ScheduleProvider, OddsProvider):
    """ESPN public scoreboard API: free, no key. Schedules for every league and fallback odds."""

    name = "espn"

    def __init__(self, client: Optional[ResilientClient] = None):
        self._client = client or ResilientClient("espn")
        self._cache: dict[str, dict[str, Any]] = {}
        self._cache_ttl = settings.ESPN_CACHE_TTL_SECONDS

    def _get_cached(self, key: str, ttl: Optional[int] = None) -> Optional[list[dict]]:
        entry = self._cache.get(key)
        if entry and (time.monotonic() - entry["ts"]) < (ttl if ttl is not None else self._cache_ttl):
            return entry["data"]
        return None

    def _set_cache(self, key: str, data: list[dict]) -> None:
        self._cache[key] = {"data": data, "ts": time.monotonic()}

    async def _fetch_events(self, league: str, day: str | date | None = None, ttl: Optional[int] = None) -> list[dict]:
        """Scoreboard events for a league, optionally pinned to a day."""
        path = ESPN_PATHS.get(str(league).upper())
        if not path:
            return []

        params: dict[str, str] = {}
        if day is not None:
            params["dates"] = parse_day(day).strftime("%Y%m%d")

        cache_key = f"{path}:{params.get('dates', 'now')}"
        cached = self._get_cached(cache_key, ttl)
        if cached is not None:
            return cached

        try:
            data = await self._client.get_json(f"{settings.ESPN_BASE_URL}/{path}/scoreboard", params=params)
        except Exception as e:
            logger.error("ESPN scoreboard error for %s: %s", league, e)
            stale = self._cache.get(cache_key)
            return stale["data"] if stale else []

        events = data.get("events", []) if isinstance(data, dict) else []
        self._set_cache(cache_key, events)
        return events

    def _entry(self, league: str, event: dict) -> Optional[ScheduleEntry]:
        comp = (event.get("competitions") or [{}])[0]
        home, away = _competitors(comp)
        status_type = (comp.get("status") or event.get("status") or {}).get("type") or {}
        try:
            return ScheduleEntry(
                id=event.get("id"),
                league=league,
                start_utc=comp.get("date") or event.get("date"),
                home=_team_name(home),
                away=_team_name(away),
                venue=(comp.get("venue") or {}).get("fullName"),
                extra={
                    "state": status_type.get("state"),
                    "detail": status_type.get("shortDetail"),
                    "home_score": home.get("score"),
                    "away_score": away.get("score"),
                },
            )
        except (ValidationError, ValueError, TypeError) as exc:
            logger.warning("ESPN: skipping event %s: %s", event.get("id"), exc)
            return None

    async def fetch_by_date(self, league: str, day: str | date) -> list[ScheduleEntry]:
        league = str(league).upper()
        events = await self._fetch_events(league, day)
        entries = [e for e in (self._entry(league, ev) for ev in events) if e is not None]
        entries.sort(key=lambda e: e.start_utc)
        logger.info("ESPN: %d %s games on %s", len(entries), league, day)
        return entries

    async def fetch_live(self, league: str) -> list[ScheduleEntry]:
        league = str(league).upper()
        events = await self._fetch_events(league, local_today(settings.DISPLAY_TIMEZONE), ttl=60)
        live = []
        for event in events:
            entry = self._entry(league, event)
            if entry is not None and entry.extra.get("state") == "in":
                live.append(entry)
        return live

    async def get_odds(self, league: str, day: str | date) -> list[OddsRow]:
        league = str(league).upper()
        rows: list[OddsRow] = []
        for event in await self._fetch_events(league, day):
            comp = (event.get("competitions") or [{}])[0]
            home_c, away_c = _competitors(comp)
            home, away = _team_name(home_c), _team_name(away_c)
            try:
                rows.append(OddsRow.model_validate({
                    "sport_key": ODDS_API_SPORT_KEYS.get(league),
                    "start": comp.get("date") or event.get("date"),
                    "home": home,
                    "away": away,
                    "books": parse_competition_odds(comp.get("odds") or event.get("odds") or [], home, away),
                }))
            except ValidationError as exc:
                logger.warning("ESPN: skipping odds for event %s: %s", event.get("id"), exc.error_count())
        return rows

    async def aclose(self) -> None:
        await self._client.aclose()
