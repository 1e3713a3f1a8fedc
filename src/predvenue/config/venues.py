"""Static per-venue rules, features and theming, plus active-venue selection.

Exactly one venue is active per process. It is chosen by the
``PREDVENUE_ACTIVE_VENUE`` environment variable; an unknown value falls back to
``polymarket`` with a warning instead of failing startup.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

import structlog
from pydantic import BaseModel

log = structlog.get_logger(__name__)

ACTIVE_VENUE_ENV = "PREDVENUE_ACTIVE_VENUE"
DEFAULT_VENUE_ID = "polymarket"


class VenueRules(BaseModel):
    picks_per_pack: int
    weekly_pack_limit: int
    allow_cashout: bool


class VenueFeatures(BaseModel):
    wallet_required: bool
    show_orderbook: bool
    instant_execution: bool  # vs. requiring an explicit confirmation step
    supports_partial_sell: bool


class VenueTheme(BaseModel):
    accent_color: str  # hex
    logo: str
    background_color: str | None = None


class VenueApi(BaseModel):
    base_url: str | None = None
    rate_limit_per_minute: int | None = None


class VenueConfig(BaseModel):
    venue_id: str
    display_name: str
    description: str | None = None
    rules: VenueRules
    features: VenueFeatures
    theme: VenueTheme
    api: VenueApi = VenueApi()


VENUE_CONFIGS: dict[str, VenueConfig] = {
    "polymarket": VenueConfig(
        venue_id="polymarket",
        display_name="Polymarket",
        description="Leading prediction market on Polygon",
        rules=VenueRules(picks_per_pack=5, weekly_pack_limit=2, allow_cashout=False),
        features=VenueFeatures(
            wallet_required=False,
            show_orderbook=True,
            instant_execution=False,
            supports_partial_sell=True,
        ),
        theme=VenueTheme(
            accent_color="#6366f1",
            logo="/venues/polymarket.svg",
            background_color="#0f0f23",
        ),
        api=VenueApi(base_url="https://gamma-api.polymarket.com", rate_limit_per_minute=60),
    ),
    "jupiter": VenueConfig(
        venue_id="jupiter",
        display_name="Jupiter",
        description="Prediction markets on Solana, backed by Kalshi liquidity",
        rules=VenueRules(picks_per_pack=5, weekly_pack_limit=2, allow_cashout=True),
        features=VenueFeatures(
            wallet_required=True,
            show_orderbook=False,
            instant_execution=True,
            supports_partial_sell=False,
        ),
        theme=VenueTheme(
            accent_color="#22c55e",
            logo="/venues/jupiter.svg",
            background_color="#0a1628",
        ),
        api=VenueApi(
            base_url="https://api.elections.kalshi.com/trade-api/v2",
            rate_limit_per_minute=30,
        ),
    ),
}

# Fallbacks for unknown venue ids (Polymarket-style game rules)
_DEFAULT_RULES = VenueRules(picks_per_pack=5, weekly_pack_limit=2, allow_cashout=False)
_DEFAULT_FEATURES = VenueFeatures(
    wallet_required=False,
    show_orderbook=False,
    instant_execution=False,
    supports_partial_sell=True,
)
_DEFAULT_THEME = VenueTheme(accent_color="#6366f1", logo="/venues/default.svg")


def get_venue_config(venue_id: str) -> VenueConfig | None:
    return VENUE_CONFIGS.get(venue_id)


def get_active_venue_id(env: Mapping[str, str] | None = None) -> str:
    """Return the configured active venue id, or the default when unset/unknown."""
    env = os.environ if env is None else env
    raw = (env.get(ACTIVE_VENUE_ENV) or "").strip().lower()
    if not raw:
        return DEFAULT_VENUE_ID
    if raw not in VENUE_CONFIGS:
        log.warning(
            "unknown_active_venue",
            venue=raw,
            fallback=DEFAULT_VENUE_ID,
            known=sorted(VENUE_CONFIGS),
        )
        return DEFAULT_VENUE_ID
    return raw


def get_active_venue_config(env: Mapping[str, str] | None = None) -> VenueConfig:
    return VENUE_CONFIGS[get_active_venue_id(env)]


def get_enabled_venues(env: Mapping[str, str] | None = None) -> list[VenueConfig]:
    """Single-active-venue model: the enabled list is just the active venue."""
    return [get_active_venue_config(env)]


def is_venue_enabled(venue_id: str, env: Mapping[str, str] | None = None) -> bool:
    return venue_id == get_active_venue_id(env)


def get_venue_rules(venue_id: str) -> VenueRules:
    config = VENUE_CONFIGS.get(venue_id)
    return config.rules if config else _DEFAULT_RULES.model_copy()


def get_venue_features(venue_id: str) -> VenueFeatures:
    config = VENUE_CONFIGS.get(venue_id)
    return config.features if config else _DEFAULT_FEATURES.model_copy()


def get_venue_theme(venue_id: str) -> VenueTheme:
    config = VENUE_CONFIGS.get(venue_id)
    return config.theme if config else _DEFAULT_THEME.model_copy()
