import pytest

from app.core import response_cache


@pytest.fixture(autouse=True)
def _clear_response_cache():
    """Primary lookups are cached process-wide; start every test cold."""
    response_cache.clear()
    yield
    response_cache.clear()
