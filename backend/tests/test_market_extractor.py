"""
backend/tests/test_market_extractor.py

Purpose:
    Best-for-bettor and consensus price selection per market side,
    including malformed prices and the over/under name filter.
"""

from __future__ import annotations

import sys

import pytest

sys.path.insert(0, "backend")

from oddsboard.services.market_extractor import collect_candidates, extract_best_or_consensus

from _odds_builders import h2h_book, make_row, spread_book, totals_book

HOME, AWAY = "New York Yankees", "Boston Red Sox"
START = "2024-07-01T23:00:00Z"


def _away_prices(*books):
    return make_row(HOME, AWAY, START, [h2h_book(name, HOME, -150, AWAY, price) for name, price in books])


def test_best_compares_implied_probability_not_raw_integers():
    row = _away_prices(("bookA", 120), ("bookB", -110))
    selection = extract_best_or_consensus(row, "h2h", "away", policy="best")
    assert selection.price == 120
    assert selection.book == "booka"
    assert selection.sources == ("booka",)


def test_best_across_the_plus_minus_100_boundary():
    row = _away_prices(("bookA", -105), ("bookB", 100), ("bookC", -102))
    assert extract_best_or_consensus(row, "h2h", "away").price == 100


def test_consensus_prefers_largest_cluster():
    row = _away_prices(("bookA", -110), ("bookB", -110), ("bookC", -105))
    selection = extract_best_or_consensus(row, "h2h", "away", policy="consensus")
    assert selection.price == -110
    assert selection.sources == ("booka", "bookb")


def test_consensus_without_agreement_is_none():
    row = _away_prices(("bookA", -110), ("bookB", -105), ("bookC", 100))
    assert extract_best_or_consensus(row, "h2h", "away", policy="consensus") is None


def test_consensus_counts_distinct_sources_only():
    row = _away_prices(("bookA", -110), ("BookA", -110))
    assert extract_best_or_consensus(row, "h2h", "away", policy="consensus") is None
    assert extract_best_or_consensus(row, "h2h", "away", policy="consensus", min_sources=1).price == -110


def test_consensus_clusters_on_point_and_price():
    row = make_row(HOME, AWAY, START, [
        spread_book("bookA", HOME, -1.5, 140, AWAY, 1.5, -160),
        spread_book("bookB", HOME, -1.5, 140, AWAY, 1.5, -160),
        spread_book("bookC", HOME, -2.5, 140, AWAY, 2.5, -180),
    ])
    selection = extract_best_or_consensus(row, "spreads", "home", policy="consensus")
    assert (selection.point, selection.price) == (-1.5, 140)


def test_unusable_prices_are_skipped():
    row = _away_prices(("bookA", 0), ("bookB", None), ("bookC", "junk"), ("bookD", "+115"))
    selection = extract_best_or_consensus(row, "h2h", "away")
    assert selection.price == 115
    assert selection.book == "bookd"


def test_outcome_names_are_canonicalized():
    row = make_row(HOME, AWAY, START, [h2h_book("bookA", "NYY", -130, "BOS", 110)])
    assert extract_best_or_consensus(row, "h2h", "home").price == -130
    assert extract_best_or_consensus(row, "h2h", "away").price == 110


def test_totals_match_over_under_exactly():
    book = totals_book("bookA", 8.5, -105, -115)
    book["markets"][0]["outcomes"].append({"name": "Over 8.5", "point": 8.5, "price": 300})
    row = make_row(HOME, AWAY, START, [book, totals_book("bookB", 9, -110, -110)])
    over = extract_best_or_consensus(row, "totals", "over")
    under = extract_best_or_consensus(row, "totals", "under")
    assert (over.point, over.price) == (8.5, -105)
    assert (under.point, under.price) == (9.0, -110)


def test_one_candidate_per_book():
    book = h2h_book("bookA", HOME, -130, AWAY, 110)
    book["markets"][0]["outcomes"].append({"name": AWAY, "price": 125})
    row = make_row(HOME, AWAY, START, [book])
    assert [c.price for c in collect_candidates(row, "h2h", "away")] == [110]


def test_missing_row_or_market_is_none():
    assert extract_best_or_consensus(None, "h2h", "home") is None
    row = make_row(HOME, AWAY, START, [h2h_book("bookA", HOME, -130, AWAY, 110)])
    assert extract_best_or_consensus(row, "spreads", "home") is None
    assert extract_best_or_consensus(row, "totals", "over") is None


@pytest.mark.parametrize(
    ("market", "side", "policy"),
    [("h2h", "over", "best"), ("totals", "home", "best"), ("props", "home", "best"), ("h2h", "home", "median")],
)
def test_invalid_combinations_raise(market, side, policy):
    with pytest.raises(ValueError):
        extract_best_or_consensus(None, market, side, policy=policy)
