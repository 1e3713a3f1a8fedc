"""Polymarket Gamma API client - market discovery and metadata."""

from __future__ import annotations

from typing import Any

import structlog

from predvenue.adapters.http import LISTING_MAX_AGE, MARKET_MAX_AGE, VenueHttpClient
from predvenue.models.result import FetchResult

log = structlog.get_logger(__name__)

GAMMA_API_BASE = "https://gamma-api.polymarket.com"


def _market_rows(data: Any) -> list[dict[str, Any]]:
    """Gamma usually returns a bare list; tolerate {"markets": [...]} / {"data": [...]}."""
    if isinstance(data, dict):
        data = data.get("markets", data.get("data", []))
    if not isinstance(data, list):
        return []
    return [row for row in data if isinstance(row, dict)]


class GammaClient:
    """GET /markets and GET /markets/{id}."""

    def __init__(self, http: VenueHttpClient) -> None:
        self.http = http

    async def fetch_markets(
        self,
        *,
        active: bool | None = None,
        closed: bool | None = None,
        archived: bool | None = None,
        limit: int | None = None,
        offset: int | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> FetchResult[list[dict[str, Any]]]:
        params = {
            "active": active,
            "closed": closed,
            "archived": archived,
            "limit": limit or None,
            "offset": offset or None,
            "category": category,
            "search": search,
        }
        result = await self.http.get_json("/markets", params, max_age=LISTING_MAX_AGE)
        return result.map(_market_rows)

    async def fetch_market(self, market_id: str) -> FetchResult[dict[str, Any]]:
        result = await self.http.get_json(
            f"/markets/{market_id}", max_age=MARKET_MAX_AGE, not_found_ok=True
        )
        if result.ok and result.value is not None and not isinstance(result.value, dict):
            log.warning("gamma_unexpected_shape", market_id=market_id)
            return FetchResult.failure(f"gamma market {market_id}: unexpected payload shape")
        return result

    async def search_markets(self, query: str, limit: int = 20) -> FetchResult[list[dict[str, Any]]]:
        return await self.fetch_markets(search=query, limit=limit)
