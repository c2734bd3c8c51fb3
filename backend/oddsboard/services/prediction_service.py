"""
backend/oddsboard/services/prediction_service.py

Purpose:
    Lightweight Elo-style game prediction with home advantage and a
    recent-form adjustment, plus a keyed store for model probabilities so
    other views can compare them with market prices.

    Ratings and model probabilities live in injected stores, never in module
    globals, so each caller (and each test) controls its own state.

Dependencies:
    - dataclasses
    - oddsboard.services.team_canonicalizer
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol

from oddsboard.models.schedule import ScheduleEntry
from oddsboard.services.team_canonicalizer import canonicalize

BASE_ELO = 1500.0
HOME_ADV = 55.0  # Elo pts
K_FACTOR = 18.0
RECENT_WEIGHT = 30.0  # extra Elo from recent form (+/-)
FORM_WINDOW = 5
STRONG_PICK = 0.6


@dataclass
class TeamRating:
    elo: float = BASE_ELO
    last5: list[int] = field(default_factory=list)  # 1 win, 0 loss; oldest first


class RatingStore(Protocol):
    def get(self, team: str) -> TeamRating | None:
        ...

    def put(self, team: str, rating: TeamRating) -> None:
        ...


class InMemoryRatingStore:
    def __init__(self) -> None:
        self._ratings: dict[str, TeamRating] = {}

    def get(self, team: str) -> TeamRating | None:
        return self._ratings.get(team)

    def put(self, team: str, rating: TeamRating) -> None:
        self._ratings[team] = rating


@dataclass
class Prediction:
    prob_home: float
    prob_away: float
    analysis: list[str]
    recommendation: str


def win_probability(elo_a: float, elo_b: float) -> float:
    return 1.0 / (1.0 + 10 ** ((elo_b - elo_a) / 400.0))


def recent_adjustment(rating: TeamRating) -> float:
    """Form bonus in [-RECENT_WEIGHT, +RECENT_WEIGHT]; 0 without history."""
    if not rating.last5:
        return 0.0
    avg = sum(rating.last5) / len(rating.last5)
    return (avg - 0.5) * 2 * RECENT_WEIGHT


class EloPredictor:
    def __init__(self, store: RatingStore, league: str | None = None):
        self.store = store
        self.league = league

    def _key(self, team: str, league: str | None) -> str:
        return canonicalize(team, league or self.league)

    def rating(self, team: str, league: str | None = None) -> TeamRating:
        return self.store.get(self._key(team, league)) or TeamRating()

    def predict(self, entry: ScheduleEntry) -> Prediction:
        home = self.rating(entry.home, entry.league)
        away = self.rating(entry.away, entry.league)
        home_adj = recent_adjustment(home)
        away_adj = recent_adjustment(away)

        p_home = win_probability(home.elo + HOME_ADV + home_adj, away.elo + away_adj)
        p_away = 1.0 - p_home

        def form(label: str, rating: TeamRating, adj: float) -> str:
            if not rating.last5:
                return f"{label} recent form: n/a"
            return f"{label} recent form (last {FORM_WINDOW}): {'-'.join(map(str, rating.last5))} => adj {adj:.0f}"

        analysis = [
            f"Home advantage: +{HOME_ADV:.0f} Elo",
            form("Home", home, home_adj),
            form("Away", away, away_adj),
            f"Base ratings: {entry.home} {home.elo:.0f} vs {entry.away} {away.elo:.0f}",
        ]
        if p_home > STRONG_PICK:
            recommendation = f"Strong {entry.home} pick"
        elif p_away > STRONG_PICK:
            recommendation = f"Strong {entry.away} pick"
        else:
            recommendation = "Close matchup"
        return Prediction(prob_home=p_home, prob_away=p_away, analysis=analysis, recommendation=recommendation)

    def record_result(self, home: str, away: str, home_won: bool, league: str | None = None) -> None:
        """Apply a final score: Elo update (home advantage included) and form push."""
        home_key, away_key = self._key(home, league), self._key(away, league)
        home_rating = self.store.get(home_key) or TeamRating()
        away_rating = self.store.get(away_key) or TeamRating()

        expected_home = win_probability(home_rating.elo + HOME_ADV, away_rating.elo)
        actual_home = 1.0 if home_won else 0.0
        delta = K_FACTOR * (actual_home - expected_home)

        self.store.put(home_key, TeamRating(
            elo=home_rating.elo + delta,
            last5=(home_rating.last5 + [int(home_won)])[-FORM_WINDOW:],
        ))
        self.store.put(away_key, TeamRating(
            elo=away_rating.elo - delta,
            last5=(away_rating.last5 + [int(not home_won)])[-FORM_WINDOW:],
        ))


_KEY_RE = re.compile(r"[^A-Z0-9 ]+")


def _norm_key(text: str) -> str:
    return " ".join(_KEY_RE.sub(" ", str(text or "").upper()).split())


@dataclass
class ModelProbability:
    league: str
    date_iso: str
    away: str
    home: str
    away_prob: float | None = None
    home_prob: float | None = None


class ModelProbabilityStore:
    """Model probabilities keyed by league, date and matchup."""

    def __init__(self) -> None:
        self._items: dict[str, ModelProbability] = {}

    @staticmethod
    def key(league: str, date_iso: str, away: str, home: str) -> str:
        return f"{_norm_key(league)}|{date_iso}|{_norm_key(away)}@{_norm_key(home)}"

    def put(self, item: ModelProbability) -> None:
        self._items[self.key(item.league, item.date_iso, item.away, item.home)] = item

    def get(self, league: str, date_iso: str, away: str, home: str) -> ModelProbability | None:
        return self._items.get(self.key(league, date_iso, away, home))
