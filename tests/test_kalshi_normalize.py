"""Kalshi cents pricing, outcome labels, resolution and validation."""

import pytest

from conftest import kalshi_market
from predvenue.adapters.kalshi.normalize import (
    categorize_kalshi_market,
    determine_resolution,
    get_no_probability,
    get_yes_probability,
    is_valid_kalshi_market,
    kalshi_event_status,
    kalshi_price_to_probability,
    map_kalshi_status,
    outcome_labels,
    split_token_id,
    status_for_params,
    transform_kalshi_market,
)
from predvenue.models import Category, EventStatus, OutcomePosition


@pytest.mark.parametrize(
    "cents, prob",
    [(0, 0.0), (1, 0.01), (65, 0.65), (100, 1.0), (150, 1.0), (-5, 0.0), (None, 0.5), ("x", 0.5)],
)
def test_price_to_probability(cents, prob):
    assert kalshi_price_to_probability(cents) == pytest.approx(prob)


def test_yes_probability_uses_bid_ask_midpoint():
    """yes_bid=60, yes_ask=70, last_price=0 -> 0.65."""
    market = kalshi_market(yes_bid=60, yes_ask=70, last_price=0)
    assert get_yes_probability(market) == pytest.approx(0.65)
    assert get_no_probability(market) == pytest.approx(0.35)


def test_yes_probability_prefers_last_trade():
    assert get_yes_probability(kalshi_market(last_price=42)) == pytest.approx(0.42)


def test_yes_probability_without_liquidity():
    market = kalshi_market(yes_bid=0, yes_ask=100, last_price=0)
    assert get_yes_probability(market) == 0.5
    market = kalshi_market(last_price=None)
    del market["yes_bid"], market["yes_ask"]
    assert get_yes_probability(market) == 0.5


@pytest.mark.parametrize(
    "fields",
    [
        {"last_price": 250},
        {"last_price": -3, "yes_bid": -50, "yes_ask": -10},
        {"last_price": 0, "yes_bid": 99, "yes_ask": 400},
        {"last_price": "nan", "yes_bid": "garbage", "yes_ask": None},
        {"last_price": None, "yes_bid": None, "yes_ask": None},
    ],
)
def test_yes_probability_always_in_unit_interval(fields):
    p = get_yes_probability(kalshi_market(**fields))
    assert 0.0 <= p <= 1.0


def test_outcome_labels_dedupe_identical_subtitles():
    assert outcome_labels(kalshi_market(yes_sub_title="Hold", no_sub_title="Cut or hike")) == ("Hold", "Cut or hike")
    assert outcome_labels(kalshi_market(yes_sub_title="Lakers", no_sub_title="Lakers")) == ("Lakers", "No")
    assert outcome_labels(kalshi_market(yes_sub_title=None, no_sub_title=None)) == ("Yes", "No")


def test_transform_binary_market():
    market = transform_kalshi_market(kalshi_market())
    assert market.venue_id == "jupiter"
    assert market.venue_market_id == "KXFEDDECISION-26DEC-H0"
    assert market.supports_draw is False
    assert market.outcome_a_probability == pytest.approx(0.65)
    assert market.outcome_b_probability == pytest.approx(0.35)
    assert [o.token_id for o in market.outcomes] == ["KXFEDDECISION-26DEC-H0-yes", "KXFEDDECISION-26DEC-H0-no"]
    assert market.is_active is True and market.is_closed is False
    assert market.end_date == "2026-12-10T19:00:00Z"
    assert market.category == Category.ECONOMY


def test_settled_yes_resolves_to_a():
    res = determine_resolution(kalshi_market(status="settled", result="yes", settlement_time="2026-12-11T00:00:00Z"))
    assert res.resolved is True
    assert res.winning_outcome == OutcomePosition.A
    assert res.winning_price == 1.0
    assert res.resolved_at == "2026-12-11T00:00:00Z"


def test_finalized_no_resolves_to_b():
    res = determine_resolution(kalshi_market(status="finalized", result="no"))
    assert res.winning_outcome == OutcomePosition.B


@pytest.mark.parametrize("result", ["yes", "no", "void", "", None])
def test_open_market_is_never_resolved(result):
    assert determine_resolution(kalshi_market(status="open", result=result)).resolved is False


@pytest.mark.parametrize("result", ["void", "", None])
def test_terminal_status_without_winner_is_unresolved(result):
    assert determine_resolution(kalshi_market(status="settled", result=result)).resolved is False


def test_resolution_is_deterministic():
    raw = kalshi_market(status="determined", result="no")
    assert determine_resolution(raw) == determine_resolution(raw)


@pytest.mark.parametrize(
    "overrides, valid",
    [
        ({}, True),
        ({"market_type": "scalar"}, False),
        ({"ticker": ""}, False),
        ({"ticker": None}, False),
        ({"result": "void"}, False),
    ],
)
def test_is_valid_kalshi_market(overrides, valid):
    assert is_valid_kalshi_market(kalshi_market(**overrides)) is valid


def test_status_mapping():
    assert status_for_params(True, None) == "open"
    assert status_for_params(None, True) == "settled"
    assert status_for_params(True, True) == "open"
    assert status_for_params(None, None) is None
    assert status_for_params(False, False) is None
    assert map_kalshi_status("open") == "active"
    assert map_kalshi_status("paused") == "pending_resolution"
    assert map_kalshi_status("amended") == "resolved"
    assert map_kalshi_status("initialized") == "upcoming"


def test_split_token_id():
    assert split_token_id("ABC-26-X-yes") == ("ABC-26-X", True)
    assert split_token_id("ABC-26-X-no") == ("ABC-26-X", False)
    assert split_token_id("ABC") == ("ABC", True)


@pytest.mark.parametrize(
    "overrides, category",
    [
        ({"series_ticker": "KXNBAGAME", "title": "Lakers at Warriors"}, Category.SPORTS),
        ({"series_ticker": "KXPRES", "title": "Who will win the presidential election?"}, Category.POLITICS),
        ({"series_ticker": "KXBTCD", "title": "Bitcoin price on Friday"}, Category.CRYPTO),
        ({"series_ticker": "KXOSCARS", "title": "Best Picture winner"}, Category.ENTERTAINMENT),
    ],
)
def test_categorize_kalshi_market(overrides, category):
    market = kalshi_market(event_ticker="", ticker="T-1", **overrides)
    assert categorize_kalshi_market(market) == category


@pytest.mark.parametrize("status", ["paused", "closed"])
def test_halted_market_is_not_closed(status):
    raw = kalshi_market(status=status)
    market = transform_kalshi_market(raw)
    assert market.is_active is False
    assert market.is_closed is False
    assert market.venue_status == status
    assert determine_resolution(raw).resolved is False


@pytest.mark.parametrize(
    "status, expected",
    [
        ("open", EventStatus.ACTIVE),
        ("paused", EventStatus.ACTIVE),
        ("closed", EventStatus.ACTIVE),
        ("settled", EventStatus.RESOLVED),
        ("initialized", EventStatus.UPCOMING),
        ("something-new", EventStatus.UPCOMING),
        (None, EventStatus.UPCOMING),
    ],
)
def test_kalshi_event_status(status, expected):
    assert kalshi_event_status(status) == expected


def test_categorize_inflected_keywords():
    market = kalshi_market(event_ticker="", ticker="T-1", series_ticker="KXMISC", title="Budget bills pass?")
    assert categorize_kalshi_market(market) == Category.POLITICS
