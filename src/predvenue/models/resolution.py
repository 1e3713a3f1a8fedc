"""VenueResolution - settled outcome of a market."""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from predvenue.models.market import OutcomePosition


class VenueResolution(BaseModel):
    resolved: bool
    winning_outcome: OutcomePosition | None = None
    winning_price: float | None = None
    resolved_at: str | None = None

    @model_validator(mode="after")
    def _winner_when_resolved(self) -> VenueResolution:
        if self.resolved and self.winning_outcome is None:
            raise ValueError("a resolved market needs a winning outcome")
        return self

    @classmethod
    def unresolved(cls) -> VenueResolution:
        return cls(resolved=False)
