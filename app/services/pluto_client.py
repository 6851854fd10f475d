"""
PLUTO dataset client: the two SODA query styles used by address autocomplete.

Responsibility: Build the outbound query, call the dataset API with httpx, decode JSON.
Shape checks are left to the caller; transport and decode failures raise
DatasetUnavailableError.
"""

import logging
from typing import Any

import httpx

from app.core.config import (
    AUTOCOMPLETE_CACHE_TTL,
    SELECT_FIELDS,
    SOCRATA_APP_TOKEN,
    SOCRATA_BASE_URL,
    SOCRATA_TIMEOUT,
    UPSTREAM_LIMIT,
)
from app.core.errors import DatasetUnavailableError
from app.core.response_cache import get_cached, put_cached

logger = logging.getLogger(__name__)


def _headers() -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if SOCRATA_APP_TOKEN:
        headers["X-App-Token"] = SOCRATA_APP_TOKEN
    return headers


def open_client() -> httpx.Client:
    """New client preconfigured with headers and timeout. Use as a context manager."""
    return httpx.Client(headers=_headers(), timeout=SOCRATA_TIMEOUT)


def escape_soql_literal(value: str) -> str:
    """Escape a value for a single-quoted SoQL string literal (quotes are doubled)."""
    return value.replace("'", "''")


def address_like_params(query: str) -> dict[str, str]:
    """Query params for a case-insensitive substring match on the address field, biggest buildings first."""
    needle = escape_soql_literal(query.upper())
    return {
        "$where": f"address LIKE '%{needle}%'",
        "$limit": str(UPSTREAM_LIMIT),
        "$select": SELECT_FIELDS,
        "$order": "unitsres DESC",
    }


def full_text_params(query: str) -> dict[str, str]:
    """Query params for the dataset's native full-text search. No sort."""
    return {
        "$q": query,
        "$limit": str(UPSTREAM_LIMIT),
        "$select": SELECT_FIELDS,
    }


def _get_json(client: httpx.Client, params: dict[str, str]) -> Any:
    try:
        res = client.get(SOCRATA_BASE_URL, params=params)
    except httpx.TimeoutException as e:
        raise DatasetUnavailableError(f"Dataset API timed out: {e}") from e
    except httpx.HTTPError as e:
        raise DatasetUnavailableError(f"Dataset API request failed: {e}") from e
    if res.status_code != 200:
        # SODA errors come back as a JSON object; the caller treats non-lists as no rows
        logger.warning("[pluto_client] dataset API returned %d: %s", res.status_code, res.text[:200])
    try:
        return res.json()
    except ValueError as e:
        raise DatasetUnavailableError(f"Dataset API returned non-JSON body (status {res.status_code})") from e


def fetch_address_matches(client: httpx.Client, query: str) -> Any:
    """
    Primary lookup: address LIKE '%QUERY%' ordered by residential units.
    List responses are reused for AUTOCOMPLETE_CACHE_TTL seconds.
    """
    params = address_like_params(query)
    cache_key = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
    cached = get_cached(cache_key)
    if cached is not None:
        return cached
    logger.info("[pluto_client:fetch_address_matches] IN  query=%r", query)
    data = _get_json(client, params)
    if isinstance(data, list):
        logger.info("[pluto_client:fetch_address_matches] OUT rows=%d", len(data))
        put_cached(cache_key, data, AUTOCOMPLETE_CACHE_TTL)
    else:
        logger.info("[pluto_client:fetch_address_matches] OUT non-list response type=%s", type(data).__name__)
    return data


def fetch_full_text_matches(client: httpx.Client, query: str) -> Any:
    """Fallback lookup: SODA $q full-text search."""
    logger.info("[pluto_client:fetch_full_text_matches] IN  query=%r", query)
    data = _get_json(client, full_text_params(query))
    if isinstance(data, list):
        logger.info("[pluto_client:fetch_full_text_matches] OUT rows=%d", len(data))
    return data
