"""Kalshi market payload -> canonical VenueMarket / VenueResolution.

Kalshi quotes every price (yes_bid, yes_ask, no_bid, no_ask, last_price) in
integer cents, 0-100. All probabilities here are cents / 100, clamped to [0, 1].
"""

from __future__ import annotations

import math
from typing import Any

from predvenue.adapters.categorize import categorize, tag_labels
from predvenue.adapters.validation import as_float, clamp_probability
from predvenue.models import Category, OutcomePosition, VenueMarket, VenueOutcome, VenueResolution
from predvenue.models.event import EventStatus

VENUE_ID = "jupiter"

OPEN_STATUSES = frozenset({"open", "active"})
HALTED_STATUSES = frozenset({"closed", "paused"})
RESOLVED_STATUSES = frozenset({"determined", "disputed", "amended", "finalized", "settled"})
WINNING_RESULTS = frozenset({"yes", "no"})

YES_SUFFIX = "-yes"
NO_SUFFIX = "-no"

# Series ticker prefixes for leagues (e.g. KXNBAGAME-25OCT21LALGSW).
SPORTS_TICKER_PREFIXES = (
    "kxnba", "kxwnba", "kxnfl", "kxmlb", "kxnhl", "kxncaa", "kxmls", "kxepl",
    "kxucl", "kxlaliga", "kxseriea", "kxbundesliga", "kxufc", "kxpga", "kxatp",
    "kxwta", "kxf1", "kxnascar", "kxboxing",
)

KEYWORDS: list[tuple[Category, tuple[str, ...]]] = [
    (
        Category.SPORTS,
        (
            "nba", "wnba", "nfl", "mlb", "nhl", "ncaa", "mls", "soccer", "football",
            "basketball", "baseball", "hockey", "tennis", "golf", "ufc", "boxing",
            "championship", "playoff", "playoffs", "super bowl", "world series",
            "stanley cup", "premier league", "champions league", "game", "match", "sports",
        ),
    ),
    (
        Category.POLITICS,
        (
            "election", "president", "senate", "congress", "house", "governor", "vote",
            "poll", "government", "policy", "bill", "law", "supreme court", "politics",
        ),
    ),
    (Category.CRYPTO, ("bitcoin", "ethereum", "solana", "crypto", "btc", "eth", "sol", "token", "defi")),
    (
        Category.ECONOMY,
        (
            "fed", "fomc", "interest rate", "gdp", "inflation", "cpi", "unemployment",
            "jobs", "recession", "stock", "index", "dow", "nasdaq", "s&p", "economics",
            "financials",
        ),
    ),
]


def kalshi_price_to_probability(price_cents: Any) -> float:
    """Cents (0-100) to probability (0-1); missing or non-numeric -> 0.5."""
    cents = as_float(price_cents)
    if cents is None:
        return 0.5
    return clamp_probability(cents / 100)


def get_yes_probability(market: dict[str, Any]) -> float:
    """Last trade if any; else bid/ask midpoint; 0.5 when the book is empty."""
    last_price = as_float(market.get("last_price"))
    if last_price is not None and last_price > 0:
        return kalshi_price_to_probability(last_price)
    yes_bid = as_float(market.get("yes_bid"))
    yes_ask = as_float(market.get("yes_ask"))
    bid = yes_bid if yes_bid is not None else 0.0
    ask = yes_ask if yes_ask is not None else 100.0
    if bid == 0 and ask >= 100:
        return 0.5
    return kalshi_price_to_probability((bid + ask) / 2)


def get_no_probability(market: dict[str, Any]) -> float:
    return 1 - get_yes_probability(market)


def is_market_open(market: dict[str, Any]) -> bool:
    return market.get("status") in OPEN_STATUSES


def is_market_resolved(market: dict[str, Any]) -> bool:
    return market.get("status") in RESOLVED_STATUSES


def is_market_closed(market: dict[str, Any]) -> bool:
    """Trading halted but not yet settled. Halted markets can reopen."""
    return market.get("status") in HALTED_STATUSES


def map_kalshi_status(status: str | None) -> str:
    """Kalshi status -> event lifecycle name (adds pending_resolution for halted markets)."""
    if status in OPEN_STATUSES:
        return EventStatus.ACTIVE.value
    if status in HALTED_STATUSES:
        return "pending_resolution"
    if status in RESOLVED_STATUSES:
        return EventStatus.RESOLVED.value
    # initialized, unopened and unrecognized statuses
    return EventStatus.UPCOMING.value


def kalshi_event_status(status: str | None) -> EventStatus:
    """Three-state Event status. A halted market is still live until it settles."""
    lifecycle = map_kalshi_status(status)
    if lifecycle == "pending_resolution":
        return EventStatus.ACTIVE
    return EventStatus(lifecycle)


def status_for_params(active: bool | None, closed: bool | None) -> str | None:
    """Listing intent -> Kalshi status filter. Other combinations are not mapped."""
    if active is True:
        return "open"
    if closed is True:
        return "settled"
    return None


def outcome_labels(market: dict[str, Any]) -> tuple[str, str]:
    """Yes/no labels; Kalshi sometimes repeats the yes sub-title on the no side."""
    yes_label = (market.get("yes_sub_title") or "").strip() or "Yes"
    no_raw = (market.get("no_sub_title") or "").strip()
    no_label = no_raw if no_raw and no_raw != yes_label else "No"
    return yes_label, no_label


def yes_token_id(ticker: str) -> str:
    return f"{ticker}{YES_SUFFIX}"


def no_token_id(ticker: str) -> str:
    return f"{ticker}{NO_SUFFIX}"


def split_token_id(token_id: str) -> tuple[str, bool]:
    """'<TICKER>-yes' -> (TICKER, True); '<TICKER>-no' -> (TICKER, False). Bare tickers count as yes."""
    if token_id.endswith(YES_SUFFIX):
        return token_id[: -len(YES_SUFFIX)], True
    if token_id.endswith(NO_SUFFIX):
        return token_id[: -len(NO_SUFFIX)], False
    return token_id, True


def categorize_kalshi_market(market: dict[str, Any]) -> Category:
    tickers = [
        str(market.get(k) or "").lower() for k in ("series_ticker", "event_ticker", "ticker")
    ]
    if any(t.startswith(SPORTS_TICKER_PREFIXES) for t in tickers if t):
        return Category.SPORTS
    texts = [market.get("title"), market.get("subtitle"), market.get("category")]
    return categorize(texts, tag_labels(market.get("tags")), KEYWORDS)


def transform_kalshi_market(market: dict[str, Any]) -> VenueMarket:
    """Convert a Kalshi market to a binary VenueMarket. Raises pydantic ValidationError on bad values."""
    ticker = str(market.get("ticker") or "")
    prob_yes = get_yes_probability(market)
    prob_no = 1 - prob_yes
    yes_label, no_label = outcome_labels(market)
    status = market.get("status")
    volume = as_float(market.get("volume"))
    return VenueMarket(
        venue_id=VENUE_ID,
        venue_market_id=ticker,
        venue_slug=ticker,
        venue_condition_id=market.get("event_ticker"),
        title=market.get("title") or market.get("yes_sub_title") or ticker,
        description=market.get("rules_primary") or market.get("subtitle"),
        outcomes=[
            VenueOutcome(label=yes_label, token_id=yes_token_id(ticker), price=prob_yes, position=OutcomePosition.A),
            VenueOutcome(label=no_label, token_id=no_token_id(ticker), price=prob_no, position=OutcomePosition.B),
        ],
        supports_draw=False,
        outcome_a_probability=prob_yes,
        outcome_b_probability=prob_no,
        is_active=status in OPEN_STATUSES,
        is_closed=status in RESOLVED_STATUSES,
        is_archived=False,
        venue_status=status,
        start_date=market.get("open_time"),
        end_date=market.get("close_time"),
        volume=volume or None,
        category=categorize_kalshi_market(market),
        subcategory=market.get("series_ticker") or None,
        tags=tag_labels(market.get("tags")),
    )


def determine_resolution(market: dict[str, Any]) -> VenueResolution:
    """Resolved only for a terminal status with a yes/no result; void or missing result has no winner."""
    if market.get("status") not in RESOLVED_STATUSES:
        return VenueResolution.unresolved()
    result = market.get("result")
    if result not in WINNING_RESULTS:
        return VenueResolution.unresolved()
    return VenueResolution(
        resolved=True,
        winning_outcome=OutcomePosition.A if result == "yes" else OutcomePosition.B,
        winning_price=1.0,
        resolved_at=market.get("settlement_time") or None,
    )


def is_valid_kalshi_market(market: dict[str, Any]) -> bool:
    """Binary, has a ticker, not voided, and a usable yes probability."""
    if market.get("market_type") != "binary":
        return False
    if not str(market.get("ticker") or "").strip():
        return False
    if market.get("result") == "void":
        return False
    prob = get_yes_probability(market)
    return math.isfinite(prob) and 0 <= prob <= 1
