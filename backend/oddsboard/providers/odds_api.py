import asyncio
import logging
import time
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from oddsboard.config import csv_setting, settings
from oddsboard.config_leagues import ODDS_API_SPORT_KEYS
from oddsboard.models.odds import OddsRow
from oddsboard.providers.base import OddsProvider, ProviderError
from oddsboard.providers.http_client import ResilientClient
from oddsboard.utils import day_window_utc, is_within

logger = logging.getLogger("oddsboard.odds_api")


class OddsCache:
    """Stale-while-revalidate in-memory cache with mutex for thundering herd protection."""

    def __init__(self, ttl: int):
        self.ttl = ttl
        self._data: dict[str, dict[str, Any]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, key: str) -> Optional[list[OddsRow]]:
        entry = self._data.get(key)
        if not entry:
            return None
        return entry["data"]

    def is_fresh(self, key: str) -> bool:
        entry = self._data.get(key)
        if not entry:
            return False
        return (time.monotonic() - entry["timestamp"]) < self.ttl

    def set(self, key: str, data: list[OddsRow]) -> None:
        self._data[key] = {"data": data, "timestamp": time.monotonic()}
        self._cleanup()

    def _cleanup(self) -> None:
        """Remove long-expired entries to prevent unbounded memory growth."""
        now = time.monotonic()
        expired = [k for k, v in self._data.items() if (now - v["timestamp"]) > self.ttl * 10]
        for k in expired:
            del self._data[k]
            self._locks.pop(k, None)

    def get_lock(self, key: str) -> asyncio.Lock:
        if key not in self._locks:
            self._locks[key] = asyncio.Lock()
        return self._locks[key]


def parse_event(event: dict[str, Any], sport_key: str) -> OddsRow:
    """Normalize one Odds API event into an OddsRow."""
    books = []
    for bookmaker in event.get("bookmakers") or []:
        books.append({
            "bookmaker": bookmaker.get("key") or bookmaker.get("title"),
            "markets": [
                {"key": market.get("key"), "outcomes": market.get("outcomes") or []}
                for market in bookmaker.get("markets") or []
            ],
        })
    return OddsRow.model_validate({
        "sport_key": event.get("sport_key") or sport_key,
        "start": event.get("commence_time"),
        "home": event.get("home_team"),
        "away": event.get("away_team"),
        "books": books,
    })


class TheOddsAPIProvider(OddsProvider):
    """The Odds API implementation with circuit breaker and stale-while-revalidate cache."""

    name = "the_odds_api"

    def __init__(self, client: Optional[ResilientClient] = None):
        self._client = client or ResilientClient("odds_api")
        self._cache = OddsCache(ttl=settings.ODDS_CACHE_TTL_SECONDS)
        self._api_usage: dict[str, Optional[int]] = {"requests_used": None, "requests_remaining": None}

    def _track_usage_headers(self, headers) -> None:
        used = headers.get("x-requests-used")
        remaining = headers.get("x-requests-remaining")
        try:
            if used is not None:
                self._api_usage["requests_used"] = int(float(used))
            if remaining is not None:
                self._api_usage["requests_remaining"] = int(float(remaining))
        except ValueError:
            logger.debug("Unparseable usage headers: used=%r remaining=%r", used, remaining)

    def _params(self) -> dict[str, str]:
        params = {
            "apiKey": settings.ODDS_API_KEY,
            "regions": settings.ODDS_REGIONS,
            "markets": settings.ODDS_MARKETS,
            "oddsFormat": "american",
            "dateFormat": "iso",
        }
        bookmakers = csv_setting(settings.ODDS_BOOKMAKERS)
        if bookmakers:
            params["bookmakers"] = ",".join(bookmakers)
        return params

    async def _fetch_sport(self, sport_key: str) -> list[OddsRow]:
        url = f"{settings.THEODDSAPI_BASE_URL}/sports/{sport_key}/odds"
        resp = await self._client.get(url, params=self._params())
        self._track_usage_headers(resp.headers)
        if resp.status_code >= 400:
            self._client.circuit.record_failure()
            raise ProviderError(self.name, f"HTTP {resp.status_code} for {sport_key}", resp.status_code)
        try:
            raw = resp.json()
        except ValueError as exc:
            self._client.circuit.record_failure()
            raise ProviderError(self.name, f"invalid JSON for {sport_key}") from exc
        self._client.circuit.record_success()
        return self._parse_odds_response(raw, sport_key)

    def _parse_odds_response(self, raw: Any, sport_key: str) -> list[OddsRow]:
        if not isinstance(raw, list):
            raise ProviderError(self.name, f"unexpected payload type {type(raw).__name__} for {sport_key}")
        rows: list[OddsRow] = []
        for event in raw:
            if not isinstance(event, dict):
                continue
            try:
                rows.append(parse_event(event, sport_key))
            except ValidationError as exc:
                logger.warning("Skipping malformed event %s: %s", event.get("id"), exc.error_count())
        return rows

    async def _sport_rows(self, sport_key: str) -> list[OddsRow]:
        cache_key = f"odds:{sport_key}"

        if self._cache.is_fresh(cache_key):
            return self._cache.get(cache_key) or []

        lock = self._cache.get_lock(cache_key)
        if lock.locked():
            # Another request is already refreshing; serve stale
            stale = self._cache.get(cache_key)
            if stale is not None:
                return stale

        async with lock:
            if self._cache.is_fresh(cache_key):
                return self._cache.get(cache_key) or []

            if not self._client.circuit.can_attempt():
                logger.warning("Circuit open for %s, serving stale data", sport_key)
                return self._cache.get(cache_key) or []

            try:
                rows = await self._fetch_sport(sport_key)
            except Exception as e:
                logger.error("TheOddsAPI error for %s: %s", sport_key, e)
                return self._cache.get(cache_key) or []

            self._cache.set(cache_key, rows)
            logger.info(
                "TheOddsAPI: %d events for %s (remaining quota %s)",
                len(rows), sport_key, self._api_usage["requests_remaining"],
            )
            return rows

    async def get_odds(self, league: str, day: str | date) -> list[OddsRow]:
        sport_key = ODDS_API_SPORT_KEYS.get(str(league).upper())
        if not sport_key:
            return []
        if not settings.ODDS_API_KEY:
            logger.debug("ODDS_API_KEY not set, skipping %s", sport_key)
            return []

        rows = await self._sport_rows(sport_key)
        start, end = day_window_utc(day, settings.DISPLAY_TIMEZONE)
        return sorted(
            (row for row in rows if is_within(row.start, start, end)),
            key=lambda row: row.start,
        )

    @property
    def api_usage(self) -> dict:
        return dict(self._api_usage)

    @property
    def circuit_open(self) -> bool:
        return self._client.circuit.is_open

    async def aclose(self) -> None:
        await self._client.aclose()
