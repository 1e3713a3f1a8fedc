"""Polymarket: Gamma metadata API + CLOB pricing API."""

from predvenue.adapters.polymarket.adapter import PolymarketAdapter

__all__ = ["PolymarketAdapter"]
