"""
backend/oddsboard/services/odds_matcher.py

Purpose:
    Pair a schedule entry with the odds row describing the same game.

    A row is a candidate when its home and away names match the entry's
    (canonical equality or containment, per side). Among candidates the row
    whose start is closest to the scheduled start wins, which keeps
    double-headers and rescheduled games apart. Rows without a start sort
    last; remaining ties keep input order.

Dependencies:
    - oddsboard.services.team_canonicalizer
    - oddsboard.utils.team_matching
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from oddsboard.models.odds import OddsRow
from oddsboard.models.schedule import ScheduleEntry
from oddsboard.services.team_canonicalizer import canonicalize
from oddsboard.utils.team_matching import canonical_overlap


def _start_delta_seconds(entry: ScheduleEntry, row: OddsRow) -> float:
    if row.start is None:
        return math.inf
    return abs((row.start - entry.start_utc).total_seconds())


def match_odds_row(
    entry: ScheduleEntry,
    rows: Iterable[OddsRow] | None,
    league: str | None = None,
) -> OddsRow | None:
    """Return the best-matching odds row for ``entry``, or None.

    ``league`` defaults to the entry's league. An empty or partial row list
    is normal (odds not posted yet, provider still loading) and yields None.
    """
    league = league or entry.league
    canon_home = canonicalize(entry.home, league)
    canon_away = canonicalize(entry.away, league)
    if not canon_home or not canon_away:
        return None

    best: OddsRow | None = None
    best_delta = math.inf
    for row in rows or ():
        if not canonical_overlap(canonicalize(row.home, league), canon_home):
            continue
        if not canonical_overlap(canonicalize(row.away, league), canon_away):
            continue
        delta = _start_delta_seconds(entry, row)
        # Strict "<" keeps the earliest row on equal deltas.
        if best is None or delta < best_delta:
            best = row
            best_delta = delta
    return best


def match_all(
    entries: Sequence[ScheduleEntry],
    rows: Sequence[OddsRow] | None,
) -> dict[str, OddsRow | None]:
    """Match every entry independently; keyed by ``ScheduleEntry.key``."""
    rows = list(rows or ())
    return {entry.key: match_odds_row(entry, rows) for entry in entries}
