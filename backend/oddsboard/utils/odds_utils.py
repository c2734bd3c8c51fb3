"""American/decimal odds conversion and display formatting helpers."""

from __future__ import annotations

import math
from typing import Any

NOT_AVAILABLE = "—"


def to_american_price(value: Any) -> int | None:
    """Safe conversion of a raw provider price into American odds.

    Accepts ints, floats and strings such as ``"+120"`` or ``"-110"``.
    Returns None for anything that is not a usable price: missing values,
    non-finite numbers, booleans, and ``0`` (not a valid American price).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip().replace("−", "-")
        if text.upper() in ("EVEN", "EV"):
            return 100
        if text.startswith("+"):
            text = text[1:]
        value = text
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    price = int(round(number))
    if price == 0:
        return None
    return price


def to_point(value: Any) -> float | None:
    """Safe conversion of a spread/total line."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip().replace("−", "-")
        if text.startswith("+"):
            text = text[1:]
        if text.upper() in ("PK", "PICK"):
            return 0.0
        value = text
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def american_to_decimal(price: float) -> float | None:
    if price is None or not math.isfinite(price) or price == 0:
        return None
    if price > 0:
        return 1.0 + price / 100.0
    return 1.0 + 100.0 / abs(price)


def decimal_to_american(decimal_odds: float) -> int | None:
    """Convert decimal odds to American odds; None when not convertible."""
    if decimal_odds is None or not math.isfinite(decimal_odds) or decimal_odds <= 1:
        return None
    if decimal_odds >= 2:
        return int(round((decimal_odds - 1) * 100))
    return int(round(-100 / (decimal_odds - 1)))


def format_american(price: float | None) -> str:
    if price is None or not math.isfinite(price):
        return NOT_AVAILABLE
    price = int(price)
    return f"+{price}" if price > 0 else f"{price}"


def format_point(point: float | None) -> str:
    if point is None or not math.isfinite(point):
        return NOT_AVAILABLE
    text = f"{point:g}"
    return f"+{text}" if point > 0 else text


def format_pct(probability: float | None) -> str:
    if probability is None or not math.isfinite(probability):
        return NOT_AVAILABLE
    return f"{round(probability * 100)}%"
