"""Canonical model invariants and FetchResult semantics."""

import pytest
from pydantic import ValidationError

from predvenue.adapters.categorize import categorize, tag_labels
from predvenue.adapters.validation import is_valid_venue_market
from predvenue.models import (
    Category,
    FetchResult,
    OutcomePosition,
    VenueMarket,
    VenueOutcome,
    VenueResolution,
)


def _market(probs=(0.6, 0.4), positions=None, **kwargs) -> VenueMarket:
    positions = positions or [OutcomePosition.A, OutcomePosition.B, OutcomePosition.DRAW][: len(probs)]
    outcomes = [
        VenueOutcome(label=f"o{i}", price=p, position=pos) for i, (p, pos) in enumerate(zip(probs, positions))
    ]
    fields = dict(
        venue_id="test",
        venue_market_id="m1",
        title="Test market",
        outcomes=outcomes,
        supports_draw=len(outcomes) == 3,
        outcome_a_probability=probs[0],
        outcome_b_probability=probs[1],
        outcome_draw_probability=probs[2] if len(probs) == 3 else None,
    )
    fields.update(kwargs)
    return VenueMarket(**fields)


def test_position_a_must_be_first():
    with pytest.raises(ValidationError):
        _market(positions=[OutcomePosition.B, OutcomePosition.A])


def test_supports_draw_needs_three_outcomes():
    with pytest.raises(ValidationError):
        _market(supports_draw=True)
    with pytest.raises(ValidationError):
        _market(probs=(0.4, 0.3, 0.3), supports_draw=False)


def test_invalid_position_value_rejected():
    with pytest.raises(ValidationError):
        VenueOutcome(label="x", price=0.5, position="c")


def test_probability_bounds():
    with pytest.raises(ValidationError):
        _market(probs=(1.2, -0.2))


@pytest.mark.parametrize(
    "probs, valid",
    [((0.6, 0.4), True), ((0.5, 0.45), True), ((0.5, 0.3), False), ((0.7, 0.5), False), ((0.4, 0.3, 0.3), True)],
)
def test_probability_sum_tolerance(probs, valid):
    assert is_valid_venue_market(_market(probs=probs)) is valid


def test_outcome_count_bounds():
    assert is_valid_venue_market(_market(probs=(0.4, 0.3, 0.3)), max_outcomes=2) is False
    assert is_valid_venue_market(_market(is_archived=True)) is False


def test_resolved_requires_winner():
    with pytest.raises(ValidationError):
        VenueResolution(resolved=True)
    assert VenueResolution.unresolved().winning_outcome is None


def test_fetch_result():
    ok = FetchResult.success([1, 2])
    assert ok.ok and ok.unwrap_or([]) == [1, 2]
    assert ok.map(len).value == 2

    empty = FetchResult.success(None)
    assert empty.ok and empty.unwrap_or("d") == "d"
    assert empty.map(len).value is None

    failed = FetchResult.failure("boom")
    assert not failed.ok and failed.unwrap_or([]) == []
    assert failed.map(len).error == "boom"


def test_categorize_default_and_priority():
    table = [(Category.SPORTS, ("game",)), (Category.CRYPTO, ("btc",))]
    assert categorize(["BTC game night"], [], table) == Category.SPORTS
    assert categorize(["btc"], [], table) == Category.CRYPTO
    assert categorize([None, ""], [], table) == Category.ENTERTAINMENT
    assert categorize(["nothing"], ["btc"], table) == Category.CRYPTO


def test_tag_labels():
    assert tag_labels(["Sports", {"label": "NBA", "slug": "nba"}, 3]) == ["sports", "nba", "nba"]
    assert tag_labels(None) == []
