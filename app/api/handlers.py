"""
API handlers: read request data, call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

import logging

from app.core.config import MIN_QUERY_LENGTH
from app.core.errors import DatasetUnavailableError
from app.schemas.autocomplete import AutocompleteResponse
from app.services.autocomplete_service import suggest_addresses

logger = logging.getLogger(__name__)


def handle_autocomplete(q: str | None) -> AutocompleteResponse:
    """
    Return suggestions for q. Never raises: short queries short-circuit to an empty list
    and any failure is logged and degraded to an empty list with a normal 200.
    """
    if not q or len(q) < MIN_QUERY_LENGTH:
        return AutocompleteResponse(suggestions=[])

    try:
        suggestions = suggest_addresses(q)
    except DatasetUnavailableError as e:
        logger.error("Autocomplete error: %s", e.message)
        return AutocompleteResponse(suggestions=[])
    except Exception:
        logger.exception("Autocomplete error")
        return AutocompleteResponse(suggestions=[])
    return AutocompleteResponse(suggestions=suggestions)
