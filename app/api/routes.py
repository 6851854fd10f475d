"""
API route aggregator: register endpoints; no logic, only delegate to handlers.
"""

import logging

from fastapi import APIRouter, Query

from app.api.handlers import handle_autocomplete
from app.schemas.autocomplete import AutocompleteResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "NYC address autocomplete running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Autocomplete ---

@router.get(
    "/api/autocomplete",
    response_model=AutocompleteResponse,
    tags=["autocomplete"],
    summary="Suggest NYC tax-lot addresses",
    description="Match q against PLUTO addresses (full-text fallback when nothing matches). Returns at most 8 deduplicated suggestions. Always 200; short queries and upstream failures return an empty list.",
)
def get_autocomplete(
    q: str | None = Query(None, description="Partial address, at least 2 characters."),
) -> AutocompleteResponse:
    logger.info("[api:get_autocomplete] IN  q=%r", q)
    return handle_autocomplete(q)
