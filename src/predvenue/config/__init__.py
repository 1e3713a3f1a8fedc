from predvenue.config.settings import Settings, configure_logging, get_settings, load_config
from predvenue.config.venues import (
    DEFAULT_VENUE_ID,
    VENUE_CONFIGS,
    VenueConfig,
    VenueFeatures,
    VenueRules,
    VenueTheme,
    get_active_venue_config,
    get_active_venue_id,
    get_enabled_venues,
    get_venue_config,
    get_venue_features,
    get_venue_rules,
    get_venue_theme,
    is_venue_enabled,
)

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "load_config",
    "DEFAULT_VENUE_ID",
    "VENUE_CONFIGS",
    "VenueConfig",
    "VenueFeatures",
    "VenueRules",
    "VenueTheme",
    "get_active_venue_config",
    "get_active_venue_id",
    "get_enabled_venues",
    "get_venue_config",
    "get_venue_features",
    "get_venue_rules",
    "get_venue_theme",
    "is_venue_enabled",
]
