"""predvenue - venue-agnostic prediction-market adapters."""

__version__ = "0.1.0"
