"""Polymarket CLOB API client - live token prices."""

from __future__ import annotations

import asyncio
from typing import Any

from predvenue.adapters.http import PRICE_MAX_AGE, VenueHttpClient
from predvenue.adapters.validation import as_float
from predvenue.models.result import FetchResult

CLOB_API_BASE = "https://clob.polymarket.com"


def _price_field(data: Any, key: str) -> float | None:
    if not isinstance(data, dict):
        return None
    price = as_float(data.get(key))
    if price is None or not 0 <= price <= 1:
        return None
    return price


class ClobClient:
    """GET /price and GET /midpoint for a single outcome token."""

    def __init__(self, http: VenueHttpClient) -> None:
        self.http = http

    async def _token_price(self, path: str, key: str, token_id: str) -> FetchResult[float]:
        result = await self.http.get_json(path, {"token_id": token_id}, max_age=PRICE_MAX_AGE)
        if not result.ok:
            return FetchResult.failure(result.error or "")
        price = _price_field(result.value, key)
        if price is None:
            return FetchResult.failure(f"clob {path}: no usable price for token {token_id}")
        return FetchResult.success(price)

    async def fetch_price(self, token_id: str) -> FetchResult[float]:
        return await self._token_price("/price", "price", token_id)

    async def fetch_midpoint(self, token_id: str) -> FetchResult[float]:
        return await self._token_price("/midpoint", "mid", token_id)

    async def fetch_prices(self, token_ids: list[str]) -> dict[str, FetchResult[float]]:
        """Concurrent per-token lookups; one result per token id, in no particular order."""
        unique = list(dict.fromkeys(token_ids))
        results = await asyncio.gather(*(self.fetch_price(tid) for tid in unique))
        return dict(zip(unique, results))
