"""Abstract venue adapter for pluggable prediction-market venues (Polymarket, Jupiter/Kalshi, ...).

Subclasses implement the ``*_result`` primitives, which distinguish "fetch
failed" from "confirmed empty". The public methods built on top of
them degrade failures to ``[]`` / ``None`` / unresolved so game code can treat
every venue uniformly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import Any

import structlog
from pydantic import BaseModel, ValidationError

from predvenue.adapters.validation import is_valid_venue_market
from predvenue.models import (
    EventRecord,
    FetchResult,
    OutcomePosition,
    TokenMapping,
    VenueMarket,
    VenuePriceUpdate,
    VenueResolution,
)
from predvenue.models.event import event_status

log = structlog.get_logger(__name__)


class FetchMarketsParams(BaseModel):
    """Venue-neutral listing filters. Each adapter maps what its API supports."""

    active: bool | None = None
    closed: bool | None = None
    archived: bool | None = None
    limit: int | None = None
    offset: int | None = None
    category: str | None = None
    search: str | None = None
    cursor: str | None = None


class VenueAdapter(ABC):
    """One venue behind the common VenueMarket contract."""

    venue_id: str = ""
    display_name: str = ""
    min_outcomes: int = 2
    max_outcomes: int = 3

    # ---- venue primitives -------------------------------------------------

    @abstractmethod
    async def fetch_markets_result(self, params: FetchMarketsParams) -> FetchResult[list[VenueMarket]]:
        ...

    @abstractmethod
    async def fetch_market_result(self, market_id: str) -> FetchResult[VenueMarket]:
        """Success(None) when the venue has no such market or it fails validation."""
        ...

    @abstractmethod
    async def fetch_prices_result(self, token_ids: list[str]) -> FetchResult[list[VenuePriceUpdate]]:
        ...

    @abstractmethod
    async def check_resolution_result(self, market_id: str) -> FetchResult[VenueResolution]:
        ...

    async def search_markets_result(self, query: str, limit: int = 20) -> FetchResult[list[VenueMarket]]:
        return FetchResult.success([])

    async def fetch_token_price_result(self, token_id: str) -> FetchResult[float]:
        result = await self.fetch_prices_result([token_id])
        return result.map(lambda updates: _first_token_price(updates, token_id))

    # ---- degrading contract ----------------------------------------------

    async def fetch_markets(self, params: FetchMarketsParams | None = None) -> list[VenueMarket]:
        return (await self.fetch_markets_result(params or FetchMarketsParams())).unwrap_or([])

    async def fetch_market(self, market_id: str) -> VenueMarket | None:
        return (await self.fetch_market_result(market_id)).value

    async def search_markets(self, query: str, limit: int = 20) -> list[VenueMarket]:
        return (await self.search_markets_result(query, limit)).unwrap_or([])

    async def fetch_prices(self, token_ids: list[str]) -> list[VenuePriceUpdate]:
        return (await self.fetch_prices_result(token_ids)).unwrap_or([])

    async def fetch_token_price(self, token_id: str) -> float | None:
        return (await self.fetch_token_price_result(token_id)).value

    async def check_resolution(self, market_id: str) -> VenueResolution:
        return (await self.check_resolution_result(market_id)).unwrap_or(VenueResolution.unresolved())

    async def refresh_prices(self, market: VenueMarket) -> VenuePriceUpdate | None:
        """Re-price a known market from its outcome tokens without refetching metadata.

        Positions whose token lookup failed keep their previous probability.
        Returns None when no token price could be fetched.
        """
        if not market.token_ids:
            return None
        updates = await self.fetch_prices(market.token_ids)
        prices: dict[str, float] = {}
        for update in updates:
            for tp in update.token_prices:
                prices[tp.token_id] = tp.price
        if not any(tid in prices for tid in market.token_ids):
            return None

        def _price(position: OutcomePosition, previous: float | None) -> float | None:
            outcome = market.outcome(position)
            if outcome is None or outcome.token_id is None:
                return previous
            return prices.get(outcome.token_id, previous)

        return VenuePriceUpdate(
            venue_market_id=market.venue_market_id,
            outcome_a_probability=_price(OutcomePosition.A, market.outcome_a_probability),
            outcome_b_probability=_price(OutcomePosition.B, market.outcome_b_probability),
            outcome_draw_probability=(
                _price(OutcomePosition.DRAW, market.outcome_draw_probability)
                if market.supports_draw
                else None
            ),
            token_prices=[tp for u in updates for tp in u.token_prices if tp.token_id in market.token_ids],
        )

    # ---- projection / validation -----------------------------------------

    def to_event(self, market: VenueMarket) -> EventRecord:
        """Project a VenueMarket onto the persisted Event shape."""
        a = market.outcome(OutcomePosition.A)
        b = market.outcome(OutcomePosition.B)
        draw = market.outcome(OutcomePosition.DRAW)
        return EventRecord(
            venue=market.venue_id,
            venue_event_id=market.venue_market_id,
            venue_slug=market.venue_slug,
            title=market.title,
            description=market.description,
            image_url=market.image_url,
            outcome_a_label=a.label if a else "Yes",
            outcome_b_label=b.label if b else "No",
            outcome_a_probability=market.outcome_a_probability,
            outcome_b_probability=market.outcome_b_probability,
            supports_draw=market.supports_draw,
            outcome_draw_label=(draw.label if draw else "Draw") if market.supports_draw else None,
            outcome_draw_probability=market.outcome_draw_probability,
            status=event_status(market),
            category=market.category,
            volume=market.volume,
            resolution_deadline_at=market.end_date,
        )

    def is_valid_market(self, market: VenueMarket) -> bool:
        return is_valid_venue_market(market, self.min_outcomes, self.max_outcomes)

    def extract_token_mappings(self, market: VenueMarket) -> list[TokenMapping]:
        return [
            TokenMapping(outcome=o.position, outcome_label=o.label, token_id=o.token_id)
            for o in market.outcomes
            if o.token_id
        ]

    def _normalize(
        self,
        rows: Iterable[dict[str, Any]],
        is_valid_raw: Callable[[dict[str, Any]], bool],
        transform: Callable[[dict[str, Any]], VenueMarket],
    ) -> list[VenueMarket]:
        """Two-tier filter: raw-shape check, transform, then common-model check. Rejects are dropped."""
        markets = []
        for row in rows:
            market = self._normalize_one(row, is_valid_raw, transform)
            if market is not None:
                markets.append(market)
        return markets

    def _normalize_one(
        self,
        row: Any,
        is_valid_raw: Callable[[dict[str, Any]], bool],
        transform: Callable[[dict[str, Any]], VenueMarket],
    ) -> VenueMarket | None:
        if not isinstance(row, dict) or not is_valid_raw(row):
            return None
        try:
            market = transform(row)
        except ValidationError as e:
            log.debug("skip_market", venue=self.venue_id, error=str(e))
            return None
        if not self.is_valid_market(market):
            log.debug("skip_market", venue=self.venue_id, market_id=market.venue_market_id)
            return None
        return market


def _first_token_price(updates: list[VenuePriceUpdate], token_id: str) -> float | None:
    for update in updates:
        price = update.price_for(token_id)
        if price is not None:
            return price
    return None
