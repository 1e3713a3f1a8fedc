"""Canonical schema (Pydantic) - VenueMarket, prices, resolution, Event projection."""

from predvenue.models.event import EventRecord, EventStatus
from predvenue.models.market import Category, OutcomePosition, TokenMapping, VenueMarket, VenueOutcome
from predvenue.models.price import TokenPrice, VenuePriceUpdate
from predvenue.models.resolution import VenueResolution
from predvenue.models.result import FetchResult

__all__ = [
    "VenueMarket",
    "VenueOutcome",
    "OutcomePosition",
    "Category",
    "TokenMapping",
    "VenuePriceUpdate",
    "TokenPrice",
    "VenueResolution",
    "EventRecord",
    "EventStatus",
    "FetchResult",
]
