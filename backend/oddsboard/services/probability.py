"""
backend/oddsboard/services/probability.py

Purpose:
    American-odds probability math: implied probability, two-way de-vig,
    parlay pricing, and model-vs-market edge.

Dependencies:
    - math
    - oddsboard.utils.odds_utils
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from oddsboard.models.odds import DevigResult
from oddsboard.utils.odds_utils import american_to_decimal, decimal_to_american


def implied_probability(price: float | None) -> float | None:
    """Win probability encoded by an American price, margin included.

    +150 -> 100 / 250 = 0.40, -150 -> 150 / 250 = 0.60, +/-100 -> 0.5.
    ``0``, None and non-finite prices have no probability.
    """
    if price is None or isinstance(price, bool):
        return None
    try:
        price = float(price)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price == 0:
        return None
    if price > 0:
        return 100.0 / (price + 100.0)
    return -price / (-price + 100.0)


def devig_two_way(price_a: float | None, price_b: float | None) -> DevigResult | None:
    """Remove the bookmaker margin from a two-sided market.

    The raw implied probabilities of both sides sum to slightly over 1.0;
    dividing each by that sum yields a pair summing to 1.0.
    """
    p_a = implied_probability(price_a)
    p_b = implied_probability(price_b)
    if p_a is None or p_b is None:
        return None
    total = p_a + p_b
    return DevigResult(prob_a=p_a / total, prob_b=p_b / total)


def overround(price_a: float | None, price_b: float | None) -> float | None:
    """Bookmaker margin of a two-way market (sum of implied probs minus 1)."""
    p_a = implied_probability(price_a)
    p_b = implied_probability(price_b)
    if p_a is None or p_b is None:
        return None
    return p_a + p_b - 1.0


@dataclass
class ParlayPrice:
    decimal: float
    american: int | None
    implied: float


def combine_parlay(prices: Sequence[float]) -> ParlayPrice | None:
    """Price a parlay from its legs' American prices.

    ``implied`` is the probability that at least one leg hits under the
    legs' implied probabilities, the figure a parlay slip shows.
    """
    if not prices:
        return None
    decimal = 1.0
    miss_all = 1.0
    for price in prices:
        leg_decimal = american_to_decimal(price)
        leg_prob = implied_probability(price)
        if leg_decimal is None or leg_prob is None:
            return None
        decimal *= leg_decimal
        miss_all *= 1.0 - leg_prob
    return ParlayPrice(decimal=decimal, american=decimal_to_american(decimal), implied=1.0 - miss_all)


def payout_for(price: float | None, stake: float = 100.0) -> float | None:
    """Profit on ``stake`` at an American price."""
    if price is None or price == 0 or not math.isfinite(price):
        return None
    if price > 0:
        return stake * price / 100.0
    return stake * 100.0 / abs(price)


def parlay_payout(prices: Sequence[float], stake: float = 100.0) -> float | None:
    """Profit on ``stake`` if every leg wins, from the unrounded decimal price."""
    parlay = combine_parlay(prices)
    if parlay is None:
        return None
    return stake * (parlay.decimal - 1.0)


@dataclass
class ModelPick:
    side: str
    model_prob: float
    price: int
    market_prob: float
    edge: float


def pick_by_model(
    model_away: float | None,
    model_home: float | None,
    price_away: float | None,
    price_home: float | None,
) -> ModelPick | None:
    """Pick the side the model favors and report its edge over the market.

    Edge = model probability - market implied probability (+0.06 is +6%).
    Ties go to the away side.
    """
    if model_away is None or model_home is None:
        return None
    market_away = implied_probability(price_away)
    market_home = implied_probability(price_home)
    if market_away is None or market_home is None:
        return None

    if model_away >= model_home:
        side, model_prob, price, market_prob = "away", model_away, price_away, market_away
    else:
        side, model_prob, price, market_prob = "home", model_home, price_home, market_home
    return ModelPick(
        side=side,
        model_prob=float(model_prob),
        price=int(price),
        market_prob=market_prob,
        edge=float(model_prob) - market_prob,
    )
