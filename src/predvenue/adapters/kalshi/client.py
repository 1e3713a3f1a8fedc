"""Kalshi Trade API v2 client. Jupiter Predictions sources its markets and liquidity from Kalshi."""

from __future__ import annotations

from typing import Any

import structlog

from predvenue.adapters.http import LISTING_MAX_AGE, MARKET_MAX_AGE, VenueHttpClient
from predvenue.models.result import FetchResult

log = structlog.get_logger(__name__)

KALSHI_API_BASE = "https://api.elections.kalshi.com/trade-api/v2"
MAX_PAGE_SIZE = 1000
DEFAULT_SEARCH_SCAN_LIMIT = 200


def _markets_page(data: Any) -> tuple[list[dict[str, Any]], str | None]:
    if not isinstance(data, dict):
        return [], None
    markets = data.get("markets") or []
    if not isinstance(markets, list):
        markets = []
    return [m for m in markets if isinstance(m, dict)], data.get("cursor") or None


def _matches_query(market: dict[str, Any], query: str) -> bool:
    fields = (market.get("title"), market.get("subtitle"), market.get("ticker"))
    return any(isinstance(f, str) and query in f.lower() for f in fields)


class KalshiClient:
    """GET /markets (cursor paginated) and GET /markets/{ticker}."""

    def __init__(self, http: VenueHttpClient, search_scan_limit: int = DEFAULT_SEARCH_SCAN_LIMIT) -> None:
        self.http = http
        self.search_scan_limit = search_scan_limit

    async def fetch_markets_page(
        self,
        *,
        limit: int | None = None,
        cursor: str | None = None,
        event_ticker: str | None = None,
        series_ticker: str | None = None,
        status: str | None = None,
        tickers: str | None = None,
        min_close_ts: int | None = None,
        max_close_ts: int | None = None,
    ) -> FetchResult[tuple[list[dict[str, Any]], str | None]]:
        """One page of markets plus the cursor for the next page (None on the last page)."""
        params = {
            "limit": min(limit, MAX_PAGE_SIZE) if limit else None,
            "cursor": cursor,
            "event_ticker": event_ticker,
            "series_ticker": series_ticker,
            "status": status,
            "tickers": tickers,
            "min_close_ts": min_close_ts,
            "max_close_ts": max_close_ts,
        }
        result = await self.http.get_json("/markets", params, max_age=LISTING_MAX_AGE)
        return result.map(_markets_page)

    async def fetch_markets(self, **filters: Any) -> FetchResult[list[dict[str, Any]]]:
        result = await self.fetch_markets_page(**filters)
        return result.map(lambda page: page[0])

    async def fetch_all_markets(
        self,
        *,
        limit: int | None = None,
        max_pages: int = 5,
        cursor: str | None = None,
        **filters: Any,
    ) -> FetchResult[list[dict[str, Any]]]:
        """Follow cursors until exhausted, `limit` markets collected, or `max_pages` fetched.

        A failure on the first page fails the call; later failures return what was collected.
        """
        collected: list[dict[str, Any]] = []
        for page_no in range(max_pages):
            remaining = limit - len(collected) if limit else None
            result = await self.fetch_markets_page(limit=remaining or MAX_PAGE_SIZE, cursor=cursor, **filters)
            if not result.ok or result.value is None:
                if page_no == 0:
                    return FetchResult.failure(result.error or "kalshi markets: empty response")
                log.warning("kalshi_pagination_stopped", pages=page_no, error=result.error)
                break
            markets, cursor = result.value
            collected.extend(markets)
            if not cursor or (limit and len(collected) >= limit):
                break
        return FetchResult.success(collected[:limit] if limit else collected)

    async def fetch_market(self, ticker: str) -> FetchResult[dict[str, Any]]:
        result = await self.http.get_json(f"/markets/{ticker}", max_age=MARKET_MAX_AGE, not_found_ok=True)
        if not result.ok or result.value is None:
            return result
        market = result.value.get("market") if isinstance(result.value, dict) else None
        if not isinstance(market, dict):
            log.warning("kalshi_unexpected_shape", ticker=ticker)
            return FetchResult.success(None)
        return FetchResult.success(market)

    async def search_markets(self, query: str, limit: int = 20) -> FetchResult[list[dict[str, Any]]]:
        """Kalshi has no search endpoint: scan a bounded page of open markets and filter locally."""
        result = await self.fetch_markets(status="open", limit=self.search_scan_limit)
        needle = query.strip().lower()
        return result.map(lambda markets: [m for m in markets if _matches_query(m, needle)][:limit])
