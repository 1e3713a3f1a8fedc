"""Polymarket venue adapter: Gamma for metadata, CLOB for prices."""

from __future__ import annotations

import structlog

from predvenue.adapters.base import FetchMarketsParams, VenueAdapter
from predvenue.adapters.polymarket.clob import ClobClient
from predvenue.adapters.polymarket.gamma import GammaClient
from predvenue.adapters.polymarket.normalize import (
    VENUE_ID,
    determine_resolution,
    is_valid_polymarket_market,
    transform_gamma_market,
)
from predvenue.models import (
    EventRecord,
    FetchResult,
    TokenPrice,
    VenueMarket,
    VenuePriceUpdate,
    VenueResolution,
)

log = structlog.get_logger(__name__)


class PolymarketAdapter(VenueAdapter):
    venue_id = VENUE_ID
    display_name = "Polymarket"
    min_outcomes = 2
    max_outcomes = 3

    def __init__(self, gamma: GammaClient, clob: ClobClient) -> None:
        self.gamma = gamma
        self.clob = clob

    async def fetch_markets_result(self, params: FetchMarketsParams) -> FetchResult[list[VenueMarket]]:
        result = await self.gamma.fetch_markets(
            active=params.active,
            closed=params.closed,
            archived=params.archived,
            limit=params.limit,
            offset=params.offset,
            category=params.category,
            search=params.search,
        )
        return result.map(self._normalize_rows)

    async def fetch_market_result(self, market_id: str) -> FetchResult[VenueMarket]:
        result = await self.gamma.fetch_market(market_id)
        return result.map(
            lambda row: self._normalize_one(row, is_valid_polymarket_market, transform_gamma_market)
        )

    async def search_markets_result(self, query: str, limit: int = 20) -> FetchResult[list[VenueMarket]]:
        result = await self.gamma.search_markets(query, limit)
        return result.map(self._normalize_rows)

    async def fetch_prices_result(self, token_ids: list[str]) -> FetchResult[list[VenuePriceUpdate]]:
        """One update carrying every token price that could be fetched.

        Token ids alone do not identify a market, so venue_market_id is left for
        the caller to map. Failed lookups are dropped, never retried.
        """
        if not token_ids:
            return FetchResult.success([])
        results = await self.clob.fetch_prices(token_ids)
        token_prices = [
            TokenPrice(token_id=tid, price=r.value)
            for tid, r in results.items()
            if r.ok and r.value is not None
        ]
        failed = len(results) - len(token_prices)
        if failed:
            log.info("price_lookups_dropped", venue=self.venue_id, failed=failed, total=len(results))
        if not token_prices:
            return FetchResult.success([])
        return FetchResult.success([VenuePriceUpdate(token_prices=token_prices)])

    async def fetch_token_price_result(self, token_id: str) -> FetchResult[float]:
        result = await self.clob.fetch_price(token_id)
        if result.ok:
            return result
        return await self.clob.fetch_midpoint(token_id)

    async def check_resolution_result(self, market_id: str) -> FetchResult[VenueResolution]:
        result = await self.gamma.fetch_market(market_id)
        if not result.ok:
            return FetchResult.failure(result.error or "")
        if result.value is None:
            return FetchResult.success(VenueResolution.unresolved())
        return FetchResult.success(determine_resolution(result.value))

    def to_event(self, market: VenueMarket) -> EventRecord:
        event = super().to_event(market)
        return event.model_copy(
            update={
                "polymarket_market_id": market.venue_market_id,
                "polymarket_condition_id": market.venue_condition_id,
                "polymarket_slug": market.venue_slug,
            }
        )

    def _normalize_rows(self, rows: list[dict]) -> list[VenueMarket]:
        return self._normalize(rows, is_valid_polymarket_market, transform_gamma_market)
