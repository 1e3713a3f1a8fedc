"""EventRecord - partial Event handed to the persistence layer."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from predvenue.models.market import Category, VenueMarket


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    RESOLVED = "resolved"


def event_status(market: VenueMarket) -> EventStatus:
    if market.is_closed:
        return EventStatus.RESOLVED
    if market.is_active:
        return EventStatus.ACTIVE
    return EventStatus.UPCOMING


class EventRecord(BaseModel):
    """Venue-agnostic projection of a VenueMarket onto the persisted Event shape."""

    venue: str
    venue_event_id: str
    venue_slug: str | None = None

    # Legacy Polymarket columns, only set by the Polymarket adapter
    polymarket_market_id: str | None = None
    polymarket_condition_id: str | None = None
    polymarket_slug: str | None = None

    title: str
    description: str | None = None
    image_url: str | None = None

    outcome_a_label: str = "Yes"
    outcome_b_label: str = "No"
    outcome_a_probability: float
    outcome_b_probability: float

    supports_draw: bool = False
    outcome_draw_label: str | None = None
    outcome_draw_probability: float | None = None

    status: EventStatus = EventStatus.UPCOMING
    category: Category = Category.ENTERTAINMENT
    volume: float | None = None
    resolution_deadline_at: str | None = None

    def to_partial(self) -> dict[str, Any]:
        """Dict of the fields that carry a value, ready for an upsert."""
        return self.model_dump(mode="json", exclude_none=True)
