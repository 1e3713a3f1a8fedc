"""Gamma market payload -> canonical VenueMarket / VenueResolution."""

from __future__ import annotations

import json
from typing import Any

from predvenue.adapters.categorize import categorize, tag_labels
from predvenue.adapters.validation import as_float
from predvenue.models import Category, OutcomePosition, VenueMarket, VenueOutcome, VenueResolution

VENUE_ID = "polymarket"

NEUTRAL_PRICES = [0.5, 0.5]

# Settled price at or above this marks the winning outcome.
WIN_THRESHOLD = 0.99

KEYWORDS: list[tuple[Category, tuple[str, ...]]] = [
    (
        Category.SPORTS,
        (
            "nba", "nfl", "mlb", "nhl", "soccer", "football", "basketball",
            "baseball", "hockey", "tennis", "golf", "f1", "ufc", "boxing",
            "win", "championship", "playoff", "playoffs", "super bowl", "world series",
            "premier league", "champions league", "la liga", "serie a", "sports",
        ),
    ),
    (Category.POLITICS, ("election", "president", "senate", "congress", "vote", "poll", "politics")),
    (Category.CRYPTO, ("bitcoin", "ethereum", "crypto", "btc", "eth", "solana", "price")),
    (
        Category.ECONOMY,
        ("fed", "interest rate", "inflation", "cpi", "gdp", "recession", "unemployment", "economy"),
    ),
]

_POSITIONS = (OutcomePosition.A, OutcomePosition.B, OutcomePosition.DRAW)
_DEFAULT_LABELS = ("Yes", "No", "Draw")


def _json_list(value: str | list[Any] | None) -> list[Any] | None:
    """Gamma sends list fields either as JSON arrays or as JSON-encoded strings."""
    if isinstance(value, list):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return None
    return parsed if isinstance(parsed, list) else None


def parse_outcome_labels(outcomes: str | list[Any] | None) -> list[str]:
    parsed = _json_list(outcomes) or []
    return [str(o) for o in parsed]


def parse_outcome_prices(outcome_prices: str | list[Any] | None) -> list[float]:
    """Prices as floats; neutral [0.5, 0.5] when missing or malformed."""
    parsed = _json_list(outcome_prices)
    if not parsed:
        return list(NEUTRAL_PRICES)
    prices = [as_float(p) for p in parsed]
    if any(p is None for p in prices):
        return list(NEUTRAL_PRICES)
    return prices  # type: ignore[return-value]


def parse_clob_token_ids(clob_token_ids: str | list[Any] | None) -> list[str]:
    """Token ids from a list, a JSON-encoded list, or a comma-separated string."""
    if clob_token_ids is None or clob_token_ids == "":
        return []
    parsed = _json_list(clob_token_ids)
    if parsed is not None:
        return [str(t) for t in parsed]
    if isinstance(clob_token_ids, str):
        return [t.strip() for t in clob_token_ids.split(",") if t.strip()]
    return []


def categorize_market(raw: dict[str, Any]) -> Category:
    """sports -> politics -> crypto -> economy; entertainment when nothing matches."""
    return categorize([raw.get("question") or ""], tag_labels(raw.get("tags")), KEYWORDS)


def transform_gamma_market(raw: dict[str, Any]) -> VenueMarket:
    """Convert a Gamma market object to VenueMarket. Raises pydantic ValidationError on bad values."""
    labels = parse_outcome_labels(raw.get("outcomes"))
    prices = parse_outcome_prices(raw.get("outcomePrices"))
    token_ids = parse_clob_token_ids(raw.get("clobTokenIds"))

    prob_a = prices[0] if len(prices) > 0 else 0.5
    prob_b = prices[1] if len(prices) > 1 else 1 - prob_a
    prob_draw = prices[2] if len(prices) > 2 else None
    supports_draw = len(labels) == 3 and prob_draw is not None

    probs = [prob_a, prob_b, prob_draw]
    outcomes = [
        VenueOutcome(
            label=labels[i] if i < len(labels) else _DEFAULT_LABELS[i],
            token_id=token_ids[i] if i < len(token_ids) and token_ids[i] else None,
            price=probs[i],
            position=_POSITIONS[i],
        )
        for i in range(3 if supports_draw else 2)
    ]

    volume = as_float(raw.get("volumeNum") or raw.get("volume"))
    return VenueMarket(
        venue_id=VENUE_ID,
        venue_market_id=str(raw.get("id", "")),
        venue_slug=raw.get("slug"),
        venue_condition_id=raw.get("conditionId") or raw.get("condition_id"),
        title=raw.get("question") or raw.get("title") or "",
        description=raw.get("description"),
        image_url=raw.get("image"),
        outcomes=outcomes,
        supports_draw=supports_draw,
        outcome_a_probability=prob_a,
        outcome_b_probability=prob_b,
        outcome_draw_probability=prob_draw if supports_draw else None,
        is_active=bool(raw.get("active", True)),
        is_closed=bool(raw.get("closed", False)),
        is_archived=bool(raw.get("archived", False)),
        start_date=raw.get("startDate"),
        end_date=raw.get("endDate"),
        volume=volume or None,
        category=categorize_market(raw),
        tags=tag_labels(raw.get("tags")),
    )


def determine_resolution(raw: dict[str, Any]) -> VenueResolution:
    """Winner is the outcome settled at >= 0.99; closed without a clear winner stays unresolved."""
    if not raw.get("closed"):
        return VenueResolution.unresolved()
    prices = parse_outcome_prices(raw.get("outcomePrices"))
    for position, price in zip(_POSITIONS, prices):
        if price >= WIN_THRESHOLD:
            return VenueResolution(
                resolved=True,
                winning_outcome=position,
                winning_price=price,
                resolved_at=raw.get("closedTime"),
            )
    return VenueResolution.unresolved()


def is_valid_polymarket_market(raw: dict[str, Any]) -> bool:
    """2 or 3 outcomes, not archived, and a price for every outcome."""
    labels = parse_outcome_labels(raw.get("outcomes"))
    if not 2 <= len(labels) <= 3:
        return False
    if raw.get("archived"):
        return False
    return len(parse_outcome_prices(raw.get("outcomePrices"))) >= len(labels)
