"""VenuePriceUpdate - batched price snapshot."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TokenPrice(BaseModel):
    token_id: str
    price: float = Field(..., ge=0, le=1)


class VenuePriceUpdate(BaseModel):
    """Price snapshot for a known market. Probabilities are absent when only raw token prices are known."""

    venue_market_id: str | None = None  # None when the caller maps tokens to markets itself
    outcome_a_probability: float | None = Field(None, ge=0, le=1)
    outcome_b_probability: float | None = Field(None, ge=0, le=1)
    outcome_draw_probability: float | None = Field(None, ge=0, le=1)
    token_prices: list[TokenPrice] = Field(default_factory=list)
    timestamp: str = Field(default_factory=utc_now_iso)

    def price_for(self, token_id: str) -> float | None:
        for tp in self.token_prices:
            if tp.token_id == token_id:
                return tp.price
        return None
