"""
backend/tests/test_odds_matcher.py

Purpose:
    Pairing schedule entries with odds rows: name tolerance, start-time
    proximity for double-headers, and empty or partial inputs.
"""

from __future__ import annotations

import sys

sys.path.insert(0, "backend")

from oddsboard.services.odds_matcher import match_all, match_odds_row

from _odds_builders import h2h_book, make_entry, make_row


def test_no_rows_means_no_match(yankees_red_sox):
    assert match_odds_row(yankees_red_sox, []) is None
    assert match_odds_row(yankees_red_sox, None) is None


def test_closest_start_wins_for_double_header(yankees_red_sox):
    late = make_row("New York Yankees", "Boston Red Sox", "2024-07-02T02:05:00Z", [])
    close = make_row("New York Yankees", "Boston Red Sox", "2024-07-01T23:08:00Z", [])
    assert match_odds_row(yankees_red_sox, [late, close]) is close
    assert match_odds_row(yankees_red_sox, [close, late]) is close


def test_partial_names_match_by_containment():
    entry = make_entry("Dodgers", "Giants", "2024-07-01T02:10:00Z")
    row = make_row("Los Angeles Dodgers", "San Francisco Giants", "2024-07-01T02:10:00Z", [])
    assert match_odds_row(entry, [row]) is row


def test_swapped_sides_do_not_match(yankees_red_sox):
    swapped = make_row("Boston Red Sox", "New York Yankees", "2024-07-01T23:05:00Z", [])
    assert match_odds_row(yankees_red_sox, [swapped]) is None


def test_other_games_are_ignored(yankees_red_sox):
    other = make_row("Tampa Bay Rays", "Toronto Blue Jays", "2024-07-01T23:05:00Z", [])
    assert match_odds_row(yankees_red_sox, [other]) is None


def test_row_without_start_loses_to_timed_row(yankees_red_sox):
    untimed = make_row("Yankees", "Red Sox", None, [])
    timed = make_row("Yankees", "Red Sox", "2024-07-02T03:00:00Z", [])
    assert match_odds_row(yankees_red_sox, [untimed, timed]) is timed
    assert match_odds_row(yankees_red_sox, [untimed]) is untimed


def test_equal_deltas_keep_first_row(yankees_red_sox):
    first = make_row("Yankees", "Red Sox", "2024-07-01T23:00:00Z", [h2h_book("a", "Yankees", -120, "Red Sox", 100)])
    second = make_row("Yankees", "Red Sox", "2024-07-01T23:10:00Z", [])
    assert match_odds_row(yankees_red_sox, [first, second]) is first


def test_sport_key_names_resolve_with_explicit_league():
    entry = make_entry("Lakers", "Celtics", "2025-01-15T00:30:00Z", league="NBA")
    row = make_row("Los Angeles Lakers", "Boston Celtics", "2025-01-15T00:40:00Z", [], sport_key="basketball_nba")
    assert match_odds_row(entry, [row], "basketball_nba") is row


def test_match_all_keys_by_entry(yankees_red_sox):
    other = make_entry("Dodgers", "Giants", "2024-07-01T02:10:00Z", id="745002")
    row = make_row("New York Yankees", "Boston Red Sox", "2024-07-01T23:00:00Z", [])
    result = match_all([yankees_red_sox, other], [row])
    assert result == {"MLB:745001": row, "MLB:745002": None}
