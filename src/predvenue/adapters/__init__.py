"""Venue adapters: Polymarket and Jupiter (Kalshi-backed) behind one VenueAdapter contract."""

from predvenue.adapters.base import FetchMarketsParams, VenueAdapter
from predvenue.adapters.kalshi.adapter import JupiterAdapter
from predvenue.adapters.polymarket.adapter import PolymarketAdapter
from predvenue.adapters.registry import (
    AdapterNotRegisteredError,
    VenueAdapterRegistry,
    initialize_adapters,
)

__all__ = [
    "AdapterNotRegisteredError",
    "FetchMarketsParams",
    "JupiterAdapter",
    "PolymarketAdapter",
    "VenueAdapter",
    "VenueAdapterRegistry",
    "initialize_adapters",
]
