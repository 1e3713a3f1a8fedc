"""Venue id -> adapter registry.

Nothing registers at import time. Call ``initialize_adapters()`` once at
startup and pass the returned registry to whatever needs an adapter.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import structlog

from predvenue.adapters.base import VenueAdapter
from predvenue.adapters.http import ResponseCache, VenueHttpClient
from predvenue.adapters.kalshi.adapter import JupiterAdapter
from predvenue.adapters.kalshi.client import KalshiClient
from predvenue.adapters.polymarket.adapter import PolymarketAdapter
from predvenue.adapters.polymarket.clob import ClobClient
from predvenue.adapters.polymarket.gamma import GammaClient
from predvenue.adapters.rate_limit import TokenBucket
from predvenue.config.settings import Settings
from predvenue.config.venues import get_active_venue_id

log = structlog.get_logger(__name__)


class AdapterNotRegisteredError(LookupError):
    def __init__(self, venue_id: str) -> None:
        self.venue_id = venue_id
        super().__init__(f"No adapter registered for venue: {venue_id}")


class VenueAdapterRegistry:
    """Adapters keyed by venue id. The default venue always comes from venue config."""

    def __init__(self, active_venue: Callable[[], str] = get_active_venue_id) -> None:
        self._adapters: dict[str, VenueAdapter] = {}
        self._active_venue = active_venue

    def register(self, adapter: VenueAdapter) -> None:
        """Add an adapter; an existing one for the same venue is replaced (last wins)."""
        if adapter.venue_id in self._adapters:
            log.warning("adapter_overwritten", venue=adapter.venue_id)
        self._adapters[adapter.venue_id] = adapter

    def get(self, venue_id: str) -> VenueAdapter:
        adapter = self._adapters.get(venue_id)
        if adapter is None:
            raise AdapterNotRegisteredError(venue_id)
        return adapter

    def get_or_null(self, venue_id: str) -> VenueAdapter | None:
        return self._adapters.get(venue_id)

    def has(self, venue_id: str) -> bool:
        return venue_id in self._adapters

    def venue_ids(self) -> list[str]:
        return list(self._adapters)

    def all(self) -> list[VenueAdapter]:
        return list(self._adapters.values())

    def get_default_venue_id(self) -> str:
        return self._active_venue()

    def get_default(self) -> VenueAdapter:
        return self.get(self.get_default_venue_id())

    def unregister(self, venue_id: str) -> bool:
        return self._adapters.pop(venue_id, None) is not None

    def clear(self) -> None:
        self._adapters.clear()


def _rate_limiter(requests_per_minute: int) -> TokenBucket | None:
    return TokenBucket.per_minute(requests_per_minute) if requests_per_minute > 0 else None


def build_polymarket_adapter(settings: Settings, client: httpx.AsyncClient | None = None) -> PolymarketAdapter:
    cache = ResponseCache() if settings.response_cache_enabled else None
    # Gamma and CLOB share the venue's request budget.
    limiter = _rate_limiter(settings.polymarket_rate_limit_per_minute)
    gamma = VenueHttpClient(
        settings.gamma_api_base,
        venue="polymarket",
        client=client,
        timeout_sec=settings.http_timeout_sec,
        rate_limiter=limiter,
        cache=cache,
    )
    clob = VenueHttpClient(
        settings.clob_api_base,
        venue="polymarket",
        client=client,
        timeout_sec=settings.http_timeout_sec,
        rate_limiter=limiter,
        cache=cache,
    )
    return PolymarketAdapter(GammaClient(gamma), ClobClient(clob))


def build_jupiter_adapter(settings: Settings, client: httpx.AsyncClient | None = None) -> JupiterAdapter:
    http = VenueHttpClient(
        settings.kalshi_api_base,
        venue="jupiter",
        client=client,
        timeout_sec=settings.http_timeout_sec,
        rate_limiter=_rate_limiter(settings.kalshi_rate_limit_per_minute),
        cache=ResponseCache() if settings.response_cache_enabled else None,
    )
    kalshi = KalshiClient(http, search_scan_limit=settings.kalshi_search_scan_limit)
    return JupiterAdapter(kalshi, max_pages=settings.kalshi_max_pages)


def initialize_adapters(
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
    active_venue: Callable[[], str] = get_active_venue_id,
) -> VenueAdapterRegistry:
    """Build every supported adapter and return a fresh registry holding them."""
    settings = settings or Settings()
    registry = VenueAdapterRegistry(active_venue=active_venue)
    registry.register(build_polymarket_adapter(settings, client))
    registry.register(build_jupiter_adapter(settings, client))
    log.debug("adapters_initialized", venues=registry.venue_ids(), default=registry.get_default_venue_id())
    return registry
