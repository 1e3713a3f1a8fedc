"""Shared fixtures: raw venue payloads and adapters wired to a fake HTTP transport."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from predvenue.adapters import initialize_adapters
from predvenue.adapters.registry import VenueAdapterRegistry
from predvenue.config.settings import Settings

GAMMA_HOST = "gamma-api.polymarket.com"
CLOB_HOST = "clob.polymarket.com"
KALSHI_HOST = "api.elections.kalshi.com"
KALSHI_PREFIX = "/trade-api/v2"


def gamma_market(**overrides: Any) -> dict[str, Any]:
    market = {
        "id": "512345",
        "question": "Will the Lakers win the 2026 NBA Finals?",
        "slug": "lakers-nba-finals-2026",
        "conditionId": "0xabc123",
        "outcomes": ["Yes", "No"],
        "outcomePrices": ["0.65", "0.35"],
        "clobTokenIds": json.dumps(["111", "222"]),
        "volume": "125000.5",
        "active": True,
        "closed": False,
        "archived": False,
        "endDate": "2026-06-30T00:00:00Z",
        "description": "Resolves YES if the Lakers win.",
        "image": "https://example.com/lakers.png",
    }
    market.update(overrides)
    return market


def kalshi_market(**overrides: Any) -> dict[str, Any]:
    market = {
        "ticker": "KXFEDDECISION-26DEC-H0",
        "event_ticker": "KXFEDDECISION-26DEC",
        "series_ticker": "KXFEDDECISION",
        "market_type": "binary",
        "title": "Will the Fed hold interest rates in December?",
        "subtitle": "",
        "yes_sub_title": "Hold",
        "no_sub_title": "Cut or hike",
        "status": "open",
        "result": "",
        "yes_bid": 60,
        "yes_ask": 70,
        "no_bid": 30,
        "no_ask": 40,
        "last_price": 0,
        "volume": 4200,
        "open_time": "2026-09-01T14:00:00Z",
        "close_time": "2026-12-10T19:00:00Z",
        "rules_primary": "Resolves Yes if the target rate is unchanged.",
    }
    market.update(overrides)
    return market


Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_registry() -> Callable[..., VenueAdapterRegistry]:
    """Build a registry whose adapters talk to `handler` instead of the network."""

    def _make(handler: Handler, active: str = "polymarket") -> VenueAdapterRegistry:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        settings = Settings(http={"response_cache": False})
        return initialize_adapters(settings, client=client, active_venue=lambda: active)

    return _make
