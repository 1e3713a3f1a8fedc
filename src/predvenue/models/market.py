"""VenueMarket, VenueOutcome - canonical venue-agnostic market entities."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class OutcomePosition(str, Enum):
    """Slot an outcome occupies in a market. `a` is always listed first."""

    A = "a"
    B = "b"
    DRAW = "draw"


class Category(str, Enum):
    SPORTS = "sports"
    POLITICS = "politics"
    CRYPTO = "crypto"
    ECONOMY = "economy"
    ENTERTAINMENT = "entertainment"


_POSITION_ORDER = (OutcomePosition.A, OutcomePosition.B, OutcomePosition.DRAW)


class VenueOutcome(BaseModel):
    """Single outcome of a market with its venue token/ticker id."""

    label: str
    token_id: str | None = None  # used for price lookups
    price: float = Field(..., ge=0, le=1, description="Probability/price in [0, 1]")
    position: OutcomePosition


class VenueMarket(BaseModel):
    """Canonical market - produced by every venue adapter."""

    venue_id: str
    venue_market_id: str
    venue_slug: str | None = None
    venue_condition_id: str | None = None

    title: str
    description: str | None = None
    image_url: str | None = None

    outcomes: list[VenueOutcome] = Field(default_factory=list)
    supports_draw: bool = False

    outcome_a_probability: float = Field(..., ge=0, le=1)
    outcome_b_probability: float = Field(..., ge=0, le=1)
    outcome_draw_probability: float | None = Field(None, ge=0, le=1)

    is_active: bool = True
    is_closed: bool = False
    is_archived: bool = False
    venue_status: str | None = None  # raw lifecycle status, when the venue reports one

    start_date: str | None = None  # ISO 8601, as reported by the venue
    end_date: str | None = None
    volume: float | None = None

    category: Category = Category.ENTERTAINMENT
    subcategory: str | None = None
    tags: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_outcome_layout(self) -> VenueMarket:
        positions = tuple(o.position for o in self.outcomes)
        if positions != _POSITION_ORDER[: len(positions)]:
            raise ValueError(f"outcomes must be ordered a, b, draw; got {positions}")
        if self.supports_draw != (len(self.outcomes) == 3):
            raise ValueError("supports_draw requires exactly 3 outcomes")
        if self.outcome_draw_probability is not None and not self.supports_draw:
            raise ValueError("draw probability set on a market without a draw outcome")
        return self

    def outcome(self, position: OutcomePosition) -> VenueOutcome | None:
        for o in self.outcomes:
            if o.position == position:
                return o
        return None

    @property
    def token_ids(self) -> list[str]:
        return [o.token_id for o in self.outcomes if o.token_id]


class TokenMapping(BaseModel):
    """Outcome -> venue token id, stored by the persistence layer for price refreshes."""

    outcome: OutcomePosition
    outcome_label: str
    token_id: str
