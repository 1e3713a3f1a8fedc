"""Jupiter Predictions venue adapter, backed by the Kalshi Trade API v2.

Kalshi has no per-token price endpoint: outcome "tokens" are synthetic
``<TICKER>-yes`` / ``<TICKER>-no`` ids and prices come from the market record.
"""

from __future__ import annotations

import asyncio

import structlog

from predvenue.adapters.base import FetchMarketsParams, VenueAdapter
from predvenue.adapters.kalshi.client import MAX_PAGE_SIZE, KalshiClient
from predvenue.adapters.kalshi.normalize import (
    VENUE_ID,
    determine_resolution,
    get_yes_probability,
    is_valid_kalshi_market,
    kalshi_event_status,
    no_token_id,
    split_token_id,
    status_for_params,
    transform_kalshi_market,
    yes_token_id,
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


class JupiterAdapter(VenueAdapter):
    venue_id = VENUE_ID
    display_name = "Jupiter"
    min_outcomes = 2
    max_outcomes = 2

    def __init__(self, client: KalshiClient, max_pages: int = 5) -> None:
        self.client = client
        self.max_pages = max_pages

    async def fetch_markets_result(self, params: FetchMarketsParams) -> FetchResult[list[VenueMarket]]:
        if params.search:
            return await self.search_markets_result(params.search, params.limit or 20)
        status = status_for_params(params.active, params.closed)
        if params.limit and params.limit > MAX_PAGE_SIZE:
            result = await self.client.fetch_all_markets(
                limit=params.limit, max_pages=self.max_pages, cursor=params.cursor, status=status
            )
        else:
            result = await self.client.fetch_markets(limit=params.limit, cursor=params.cursor, status=status)
        return result.map(self._normalize_rows)

    async def fetch_market_result(self, market_id: str) -> FetchResult[VenueMarket]:
        result = await self.client.fetch_market(market_id)
        return result.map(
            lambda row: self._normalize_one(row, is_valid_kalshi_market, transform_kalshi_market)
        )

    async def search_markets_result(self, query: str, limit: int = 20) -> FetchResult[list[VenueMarket]]:
        result = await self.client.search_markets(query, limit)
        return result.map(self._normalize_rows)

    async def fetch_prices_result(self, token_ids: list[str]) -> FetchResult[list[VenuePriceUpdate]]:
        """One update per distinct ticker, fetched concurrently. Failed tickers are dropped."""
        tickers = list(dict.fromkeys(split_token_id(tid)[0] for tid in token_ids))
        results = await asyncio.gather(*(self.client.fetch_market(t) for t in tickers))
        updates = []
        for ticker, result in zip(tickers, results):
            if not result.ok or result.value is None:
                log.debug("price_lookup_dropped", venue=self.venue_id, ticker=ticker, error=result.error)
                continue
            prob_yes = get_yes_probability(result.value)
            updates.append(
                VenuePriceUpdate(
                    venue_market_id=ticker,
                    outcome_a_probability=prob_yes,
                    outcome_b_probability=1 - prob_yes,
                    token_prices=[
                        TokenPrice(token_id=yes_token_id(ticker), price=prob_yes),
                        TokenPrice(token_id=no_token_id(ticker), price=1 - prob_yes),
                    ],
                )
            )
        return FetchResult.success(updates)

    async def fetch_token_price_result(self, token_id: str) -> FetchResult[float]:
        ticker, is_yes = split_token_id(token_id)
        result = await self.client.fetch_market(ticker)
        return result.map(lambda market: get_yes_probability(market) if is_yes else 1 - get_yes_probability(market))

    async def check_resolution_result(self, market_id: str) -> FetchResult[VenueResolution]:
        result = await self.client.fetch_market(market_id)
        if not result.ok:
            return FetchResult.failure(result.error or "")
        if result.value is None:
            return FetchResult.success(VenueResolution.unresolved())
        return FetchResult.success(determine_resolution(result.value))

    def to_event(self, market: VenueMarket) -> EventRecord:
        event = super().to_event(market)
        update = {"supports_draw": False, "outcome_draw_label": None, "outcome_draw_probability": None}
        if market.venue_status is not None:
            update["status"] = kalshi_event_status(market.venue_status)
        return event.model_copy(update=update)

    def _normalize_rows(self, rows: list[dict]) -> list[VenueMarket]:
        return self._normalize(rows, is_valid_kalshi_market, transform_kalshi_market)
