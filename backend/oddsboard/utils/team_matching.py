"""
backend/oddsboard/utils/team_matching.py

Purpose:
    Team-name comparison used when pairing schedule entries with odds rows.
    Canonical equality first, substring containment as the tolerant fallback
    for partial names ("DODGERS" vs "LOS ANGELES DODGERS").

Notes:
    - Containment is checked on canonical forms, in either direction.
    - Empty names never match; an empty string is a substring of everything.
"""

from __future__ import annotations

from oddsboard.services.team_canonicalizer import canonicalize


def canonical_overlap(canon_a: str, canon_b: str) -> bool:
    """True when two canonical names are equal or one contains the other."""
    if not canon_a or not canon_b:
        return False
    return canon_a == canon_b or canon_a in canon_b or canon_b in canon_a


def teams_match(name_a: str, name_b: str, sport_or_league: str | None = None) -> bool:
    """Return True when both names likely refer to the same team."""
    return canonical_overlap(
        canonicalize(name_a, sport_or_league),
        canonicalize(name_b, sport_or_league),
    )
