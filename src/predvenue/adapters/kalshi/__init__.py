"""Jupiter Predictions via the Kalshi Trade API v2."""

from predvenue.adapters.kalshi.adapter import JupiterAdapter

__all__ = ["JupiterAdapter"]
