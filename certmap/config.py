"""
Configuration for the certified company map
============================================
Paths, URLs, map defaults and the fixed lookup tables in one place.
"""

from pathlib import Path

# =========================================================
# Paths
# =========================================================

PROJECT_ROOT = Path(__file__).parent.parent

ASSETS_DIR = PROJECT_ROOT / "assets"
CITY_INDEX_PATH = ASSETS_DIR / "in-cities.json"
DATASET_PATH = PROJECT_ROOT / "dataset.xlsx"

INDIA_STATES_GEOJSON_URL = (
    "https://raw.githubusercontent.com/india-in-data/india_maps/master/india_state_ut_administered.geojson"
)

FETCH_TIMEOUT = 30

# =========================================================
# Map defaults
# =========================================================

MAP_CENTER = (22.9, 78.8)  # lat, lon
MAP_ZOOM = 5
CITY_ZOOM = 10
MAP_STYLE = "https://basemaps.cartocdn.com/gl/positron-gl-style/style.json"
BASEMAP_ATTRIBUTION = "Basemap: © CARTO, © OpenStreetMap contributors"

MARKER_RADIUS_PX = 6
MARKER_FILL_OPACITY = 0.9
MARKER_LINE_WIDTH_PX = 1

# =========================================================
# Marker colors by Status
# =========================================================

UNKNOWN_STATUS = "Unknown"

STATUS_COLORS = {
    "Completed": "#2e7d32",
    "Working on Documentation": "#1e88e5",
    "Inactive": "#757575",
    "Hold": "#ef6c00",
    "To be updated": "#8e24aa",
    "Certification Payment Pending": "#c62828",
    "Intro Session Pending": "#6d4c41",
    "Data Received": "#3949ab",
    "Waiting for CTO, on-hold": "#bdbdbd",
    UNKNOWN_STATUS: "#9e9e9e",
}

# =========================================================
# Minimal fallback coordinates if assets/in-cities.json is missing
# city -> (lat, lon, state)
# =========================================================

CITY_COORDS = {
    "Hyderabad": (17.3850, 78.4867, "Telangana"),
    "Bengaluru": (12.9716, 77.5946, "Karnataka"),
    "Chennai": (13.0827, 80.2707, "Tamil Nadu"),
    "Mumbai": (19.0760, 72.8777, "Maharashtra"),
    "Pune": (18.5204, 73.8567, "Maharashtra"),
    "Ahmedabad": (23.0225, 72.5714, "Gujarat"),
    "Surat": (21.1702, 72.8311, "Gujarat"),
    "Jaipur": (26.9124, 75.7873, "Rajasthan"),
    "Kolkata": (22.5726, 88.3639, "West Bengal"),
    "Nashik": (20.0113, 73.7908, "Maharashtra"),
    "Coimbatore": (11.0168, 76.9558, "Tamil Nadu"),
}
