"""Venue-independent checks on normalized markets."""

from __future__ import annotations

import math
from typing import Any

from predvenue.models.market import VenueMarket

PROBABILITY_SUM_MIN = 0.9
PROBABILITY_SUM_MAX = 1.1


def probability_sum(market: VenueMarket) -> float:
    return (
        market.outcome_a_probability
        + market.outcome_b_probability
        + (market.outcome_draw_probability or 0.0)
    )


def is_valid_venue_market(market: VenueMarket, min_outcomes: int = 2, max_outcomes: int = 3) -> bool:
    """Outcome count in bounds, not archived, probabilities sum to ~1 (rounding tolerance)."""
    if not min_outcomes <= len(market.outcomes) <= max_outcomes:
        return False
    if market.is_archived:
        return False
    total = probability_sum(market)
    return PROBABILITY_SUM_MIN <= total <= PROBABILITY_SUM_MAX


def as_float(value: Any) -> float | None:
    """Finite float from a number or numeric string; None otherwise."""
    if value is None or isinstance(value, bool):
        return None
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def clamp_probability(p: float) -> float:
    return min(max(p, 0.0), 1.0)
