"""
Address autocomplete: lookup with fallback, then normalize/dedupe/truncate.

Responsibility: Turn a user query into at most MAX_SUGGESTIONS Suggestions.
Errors propagate; the API handler decides how to degrade.
"""

import logging
import math
import re
from typing import Any

from app.core.config import BBL_LENGTH, MAX_SUGGESTIONS
from app.schemas.autocomplete import Suggestion
from app.services.nyc_lookups import borough_name, neighborhood_for_zip
from app.services.pluto_client import fetch_address_matches, fetch_full_text_matches, open_client

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def pad_bbl(bbl: Any) -> str:
    """
    Normalize a BBL to exactly BBL_LENGTH digits.

    Non-digits are stripped (PLUTO often returns '1000010010.00000000'), short values
    are left-padded with zeros, long values keep their first BBL_LENGTH digits.
    Empty input gives "".
    """
    if bbl is None or bbl == "":
        return ""
    clean = _NON_DIGITS.sub("", str(bbl))
    if not clean:
        return ""
    if len(clean) == BBL_LENGTH:
        return clean
    if len(clean) < BBL_LENGTH:
        return clean.zfill(BBL_LENGTH)
    return clean[:BBL_LENGTH]


def coerce_units(value: Any) -> int:
    """Residential unit count as a non-negative int; anything non-numeric is 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def build_suggestions(rows: Any, limit: int = MAX_SUGGESTIONS) -> list[Suggestion]:
    """
    Filter, dedupe (first address wins) and map upstream rows to Suggestions.
    Non-list input yields [].
    """
    if not isinstance(rows, list):
        return []

    seen: set[str] = set()
    suggestions: list[Suggestion] = []
    for row in rows:
        # null or scalar rows are skipped, the rest of the batch still counts
        if not isinstance(row, dict):
            continue
        address = row.get("address")
        raw_bbl = row.get("bbl")
        if not address or not raw_bbl:
            continue
        address = str(address)
        bbl = pad_bbl(raw_bbl)
        if len(bbl) != BBL_LENGTH or address in seen:
            continue
        seen.add(address)
        zipcode = row.get("zipcode") or ""
        suggestions.append(
            Suggestion(
                bbl=bbl,
                address=address,
                borough=borough_name(row.get("borough")),
                zipcode=str(zipcode),
                neighborhood=neighborhood_for_zip(str(zipcode)),
                units=coerce_units(row.get("unitsres")),
            )
        )
        if len(suggestions) >= limit:
            break
    return suggestions


def suggest_addresses(query: str) -> list[Suggestion]:
    """
    Primary LIKE lookup; full-text fallback only when the primary gave no rows.
    Both calls share one client and run sequentially.
    """
    logger.info("[autocomplete:suggest_addresses] IN  query=%r", query)
    with open_client() as client:
        rows = fetch_address_matches(client, query)
        if not isinstance(rows, list) or not rows:
            logger.info("[autocomplete:suggest_addresses] primary empty, trying full-text fallback")
            rows = fetch_full_text_matches(client, query)
    suggestions = build_suggestions(rows)
    logger.info("[autocomplete:suggest_addresses] OUT suggestions=%d", len(suggestions))
    return suggestions
