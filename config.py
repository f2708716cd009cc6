# config.py
"""
Configuration for the Asteroid Impact Simulator.

Values come from the environment (a local .env file is honoured); physics
constants and default impact parameters live here so every module reads them
from one place.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# NASA NeoWs feed (public API, rate limited; DEMO_KEY works for light use)
NASA_API_KEY = os.getenv("NASA_API_KEY", "DEMO_KEY")
NASA_NEO_API = os.getenv("NASA_NEO_API", "https://api.nasa.gov/neo/rest/v1/feed")
NEO_REQUEST_TIMEOUT = float(os.getenv("NEO_REQUEST_TIMEOUT", "10"))
NEO_FEED_LIMIT = int(os.getenv("NEO_FEED_LIMIT", "10"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# physics constants
TNT_ENERGY_JOULES = 4.184e9  # 1 ton of TNT in joules
EARTH_RADIUS_M = 6371000.0
SECONDS_PER_YEAR = 365.25 * 24 * 3600

# default impact parameters (diameter m, velocity km/s, angle deg, density kg/m^3)
DEFAULT_PARAMS = {
    'diameter_m': 100.0,
    'velocity_km_s': 20.0,
    'angle_deg': 45.0,
    'density_kg_m3': 3000.0,
}

DEFAULT_WARNING_YEARS = 5.0
