"""
backend/oddsboard/services/team_canonicalizer.py

Purpose:
    Canonicalize free-text team names so schedule feeds, the odds aggregator
    and ESPN can be compared. One canonical string per team per sport.

Dependencies:
    - re
    - unicodedata
    - oddsboard.config_leagues
"""

from __future__ import annotations

import re
import unicodedata

from oddsboard.config_leagues import SPORT_KEY_TO_LEAGUE, SYNONYM_TABLES

_STRIP_RE = re.compile(r"[^A-Z0-9 ]+")
_SPACE_RE = re.compile(r"\s+")


def resolve_league(sport_or_league: str | None) -> str | None:
    """Map a league code or an Odds API sport key to a league code."""
    if not sport_or_league:
        return None
    text = str(sport_or_league).strip()
    league = SPORT_KEY_TO_LEAGUE.get(text.lower())
    if league:
        return league
    upper = text.upper()
    return upper if upper in SYNONYM_TABLES else None


def normalize_name(raw: str | None) -> str:
    """
    Normalize a team name into a comparable token.

    Steps:
        1. NFKD accent folding to ASCII
        2. uppercase
        3. drop everything outside [A-Z0-9 ]
        4. whitespace collapse + trim
    """
    text = unicodedata.normalize("NFKD", str(raw or ""))
    text = text.encode("ascii", "ignore").decode("ascii").upper()
    text = _STRIP_RE.sub("", text)
    return _SPACE_RE.sub(" ", text).strip()


def canonicalize(raw_name: str | None, sport_or_league: str | None = None) -> str:
    """Return the canonical name for ``raw_name`` within a sport.

    Unknown names come back as their normalized token, which is already
    canonical for full official franchise names.
    """
    token = normalize_name(raw_name)
    if not token:
        return ""

    league = resolve_league(sport_or_league)
    table = SYNONYM_TABLES.get(league) if league else None
    if table is not None:
        canonical = table.get(token)
        if canonical:
            return canonical

    if league == "MLB" and "SOX" in token:
        return "CHICAGO WHITE SOX" if "WHITE" in token else "BOSTON RED SOX"

    return token


def same_team(name_a: str | None, name_b: str | None, sport_or_league: str | None = None) -> bool:
    """Exact canonical equality; empty names never match."""
    canon_a = canonicalize(name_a, sport_or_league)
    return bool(canon_a) and canon_a == canonicalize(name_b, sport_or_league)
