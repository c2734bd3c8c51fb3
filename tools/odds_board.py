"""Print a league's odds board for one day.

Schedule from ESPN; odds streamed from The Odds API (if ODDS_API_KEY is set)
and the ESPN scoreboard, re-printed as each source arrives.

Usage:
    python -m tools.odds_board --league MLB
    python -m tools.odds_board --league NBA --date 2025-01-15
    python -m tools.odds_board --league EPL --policy consensus --final-only
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

backend_path = Path(__file__).resolve().parent.parent / "backend"
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

from oddsboard.config import settings
from oddsboard.config_leagues import ESPN_PATHS
from oddsboard.logging_config import setup_logging
from oddsboard.models.board import ResolvedGame
from oddsboard.providers.espn import ESPNProvider
from oddsboard.providers.odds_api import TheOddsAPIProvider
from oddsboard.services.board_service import stream_board
from oddsboard.utils import local_today

log = logging.getLogger("oddsboard.tools.odds_board")


def _print_board(games: list[ResolvedGame], sources: int) -> None:
    print(f"\n--- {len(games)} games ({sources} source(s) in) ---")
    for game in games:
        entry = game.entry
        print(f"{entry.start_utc:%H:%MZ}  {entry.away} @ {entry.home}")
        print(f"    ML     {game.display['moneyline']}")
        print(f"    Spread {game.display['spread']}")
        print(f"    Total  {game.display['total']}")
        if game.fair_probs is not None:
            print(f"    Fair   {game.display['fair']}  (favorite {game.favorite_confidence:.1%})")


async def run(league: str, day: str, policy: str, final_only: bool, timeout: float) -> int:
    espn = ESPNProvider()
    odds_api = TheOddsAPIProvider()
    try:
        entries = await espn.fetch_by_date(league, day)
        if not entries:
            log.warning("No %s games on %s", league, day)
            return 0

        providers = [espn]
        if settings.ODDS_API_KEY:
            providers.insert(0, odds_api)

        latest: list[ResolvedGame] = []
        arrived = 0
        async for snapshot in stream_board(entries, providers, league, day, timeout=timeout, policy=policy):
            arrived += 1
            latest = snapshot
            if not final_only:
                _print_board(snapshot, arrived)
        if final_only:
            _print_board(latest, arrived)

        missing = sum(1 for game in latest if not game.has_odds)
        if missing:
            log.info("%d/%d games without odds yet", missing, len(latest))
        return 0
    finally:
        await odds_api.aclose()
        await espn.aclose()


def main():
    parser = argparse.ArgumentParser(description="Schedule + odds board for one league and day")
    parser.add_argument("--league", type=str, required=True, choices=sorted(ESPN_PATHS),
                        help="League code")
    parser.add_argument("--date", type=str, default=None,
                        help="Day as YYYY-MM-DD (default: today in DISPLAY_TIMEZONE)")
    parser.add_argument("--policy", type=str, default="best", choices=["best", "consensus"],
                        help="Price selection policy")
    parser.add_argument("--timeout", type=float, default=settings.PROVIDER_WAIT_SECONDS,
                        help="Seconds to wait for each odds provider")
    parser.add_argument("--final-only", action="store_true",
                        help="Print only the board after every provider settled")
    parser.add_argument("--log-level", type=str, default=None)
    args = parser.parse_args()

    setup_logging(args.log_level)
    day = args.date or local_today(settings.DISPLAY_TIMEZONE).isoformat()
    raise SystemExit(asyncio.run(run(args.league, day, args.policy, args.final_only, args.timeout)))


if __name__ == "__main__":
    main()
