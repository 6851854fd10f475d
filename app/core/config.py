"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# NYC Open Data: MapPLUTO tax lots (Socrata SODA endpoint)
SOCRATA_BASE_URL: str = (
    os.getenv("SOCRATA_BASE_URL", "https://data.cityofnewyork.us/resource/64uk-42ks.json").strip()
    or "https://data.cityofnewyork.us/resource/64uk-42ks.json"
)

# Optional app token; raises the anonymous rate limit when set
SOCRATA_APP_TOKEN: str = os.getenv("SOCRATA_APP_TOKEN", "").strip()

# API timeouts (seconds)
SOCRATA_TIMEOUT: float = _env_float("SOCRATA_TIMEOUT", 15.0)

# How long a primary lookup response may be reused (seconds, 0 disables)
AUTOCOMPLETE_CACHE_TTL: float = _env_float("AUTOCOMPLETE_CACHE_TTL", 60.0)

# Autocomplete behaviour
MIN_QUERY_LENGTH: int = 2
UPSTREAM_LIMIT: int = 15
MAX_SUGGESTIONS: int = 8
SELECT_FIELDS: str = "bbl,address,borough,zipcode,unitsres"

# BBL = 1 digit borough + 5 digit block + 4 digit lot
BBL_LENGTH: int = 10
