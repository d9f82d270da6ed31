"""
Philadelphia Energy Burden Explorer: Configuration
All configuration: model coefficients, burden bands, map defaults, services, file paths.
"""
import os

# --- Geography ---
STATE_FIPS = "42"    # Pennsylvania
COUNTY_FIPS = "101"  # Philadelphia County
GEOID_LENGTH = 11    # state(2) + county(3) + tract(6)

# Tract id property names to look for in the geometry source, in order
TRACT_ID_FIELDS = ["GEOID", "GEOID20", "GEOID10", "geoid", "tract_fips"]
TRACT_NAME_FIELDS = ["NAMELSAD", "NAME", "name"]

# Column candidates in the observed burden table
BURDEN_ID_COLUMNS = ["GEOID", "geoid", "tract_fips", "tract", "FIPS"]
BURDEN_VALUE_COLUMNS = ["burden_pct", "energy_burden", "energy_burden_pct", "burden", "BURDEN"]

# --- Regression model (fit externally in R; constants only) ---
REGRESSION_COEFFICIENTS = {
    "intercept": 11.9792,
    "housing": {
        "OWNER 1 DETACHED": -13.9688,
        "OWNER 10-19 UNIT": -10.0243,
        "OWNER 2 UNIT": -2.5044,
        "OWNER 20-49 UNIT": -8.2707,
        "OWNER 3-4 UNIT": -1.5441,
        "OWNER 5-9 UNIT": -8.2854,
        "OWNER 50+ UNIT": -9.8844,
        "OWNER BOAT_RV_VAN": -11.5456,
        "OWNER MOBILE_TRAILER": -1.4856,
        "RENTER 1 ATTACHED": -0.1838,
        "RENTER 1 DETACHED": -13.9966,
        "RENTER 10-19 UNIT": -14.8626,
        "RENTER 2 UNIT": -10.4705,
        "RENTER 20-49 UNIT": -14.1620,
        "RENTER 3-4 UNIT": -13.9941,
        "RENTER 5-9 UNIT": -13.6238,
        "RENTER 50+ UNIT": -14.1765,
        "RENTER BOAT_RV_VAN": 13.2704,
        "RENTER MOBILE_TRAILER": -6.3555,
    },
    "income": {
        "Under $20k": 14.7426,
        "$20k–$30k": 20.3513,
        "$30k–$40k": 12.8207,
        "$40k–$50k": 9.3714,
        "$50k–$60k": 6.4077,
        "$60k–$75k": 4.1346,
        "$75k–$100k": 1.3476,
        "$150k+": -0.3788,
    },
}

# --- Burden Bands ---
# Highest first. A value belongs to the first band whose "above" it strictly
# exceeds; the last band (above=None) catches everything else.
BURDEN_BANDS = [
    {"label": "Severe (>10%)",   "above": 10, "color": "#BD0026"},
    {"label": "High (7–10%)",    "above": 7,  "color": "#F03B20"},
    {"label": "Elevated (4–7%)", "above": 4,  "color": "#FD8D3C"},
    {"label": "Moderate (2–4%)", "above": 2,  "color": "#FECC5C"},
    {"label": "Low (≤2%)",       "above": None, "color": "#FFFFB2"},
]
NO_DATA_LABEL = "No data"
NO_DATA_COLOR = "#CCCCCC"

# --- Map Defaults ---
DEFAULT_CENTER = [39.99, -75.12]  # Philadelphia
DEFAULT_ZOOM = 11
LOCATED_ZOOM = 13
TILE_PROVIDER = "cartodbpositron"
TRACT_FILL_OPACITY = 0.6
TRACT_LINE_OPACITY = 0.5
HIGHLIGHT_COLOR = "#222222"

# Philadelphia bounding box (lon/lat), used to restrict autocomplete
PHILLY_BBOX = {"min_lon": -75.2803, "min_lat": 39.8670, "max_lon": -74.9558, "max_lat": 40.1379}

# --- Geocoding Service ---
NOMINATIM_URL = os.environ.get("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
GEOCODER_USER_AGENT = os.environ.get("GEOCODER_USER_AGENT", "philly-energy-burden/0.1")
GEOCODE_TIMEOUT = float(os.environ.get("GEOCODE_TIMEOUT", "10"))
AUTOCOMPLETE_MIN_CHARS = 3
AUTOCOMPLETE_LIMIT = 5

# --- File Paths ---
DATA_DIR = "data"
CACHE_DIR = "data/cache"
OUTPUT_DIR = "output"
TRACT_GEOJSON = f"{DATA_DIR}/tracts.geojson"
BURDEN_CSV = f"{DATA_DIR}/burden_lookup_clean.csv"
OUTPUT_HTML = f"{OUTPUT_DIR}/philly_energy_burden.html"
