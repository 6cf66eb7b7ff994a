"""Shared application constants.

Centralizes repeat values used by the tracker and the views so we can
document and adjust them in one place.
"""

# Mean Earth radius used by the haversine formula (km)
EARTH_RADIUS_KM = 6371.0

MS_PER_SECOND = 1000
MS_PER_HOUR = 60 * 60 * 1000

# Key-value store keys for view preferences
THEME_KEY = "hiking-theme"
TAB_KEY = "hiking-current-tab"

# Theme name -> meta theme-color for mobile browsers
THEME_COLORS = {
    "navy": "#1e3a5f",
    "forest": "#2d5016",
    "light": "#2196f3",
    "dark": "#121212",
    "accessibility": "#000000",
}

TABS = ["compass", "tracking", "trails", "weather"]
