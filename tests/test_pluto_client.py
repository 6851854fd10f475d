"""
Tests for the PLUTO dataset client using httpx.MockTransport (no network).
"""

from unittest.mock import patch

import httpx
import pytest

from app.core.errors import DatasetUnavailableError
from app.services.pluto_client import (
    address_like_params,
    fetch_address_matches,
    fetch_full_text_matches,
    full_text_params,
)


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestQueryParams:
    def test_address_like_uppercases_and_escapes_quotes(self) -> None:
        params = address_like_params("o'brien pl")
        assert params == {
            "$where": "address LIKE '%O''BRIEN PL%'",
            "$limit": "15",
            "$select": "bbl,address,borough,zipcode,unitsres",
            "$order": "unitsres DESC",
        }

    def test_full_text_has_no_order(self) -> None:
        params = full_text_params("o'brien pl")
        assert params == {
            "$q": "o'brien pl",
            "$limit": "15",
            "$select": "bbl,address,borough,zipcode,unitsres",
        }


def test_primary_sends_query_to_dataset() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=[{"address": "1 BROADWAY", "bbl": "1000130001"}])

    with _client(handler) as client:
        rows = fetch_address_matches(client, "broadway")

    assert rows == [{"address": "1 BROADWAY", "bbl": "1000130001"}]
    [request] = captured
    assert request.url.host == "data.cityofnewyork.us"
    assert request.url.path == "/resource/64uk-42ks.json"
    assert request.url.params["$where"] == "address LIKE '%BROADWAY%'"
    assert request.url.params["$order"] == "unitsres DESC"


def test_fallback_sends_full_text_query() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=[])

    with _client(handler) as client:
        assert fetch_full_text_matches(client, "grand concourse") == []

    [request] = captured
    assert request.url.params["$q"] == "grand concourse"
    assert "$order" not in request.url.params
    assert "$where" not in request.url.params


def test_primary_response_is_cached() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json=[{"address": "1 BROADWAY", "bbl": "1000130001"}])

    with _client(handler) as client:
        first = fetch_address_matches(client, "broadway")
        second = fetch_address_matches(client, "broadway")
        fetch_address_matches(client, "bowery")

    assert first == second
    assert calls == 2


def test_primary_cache_disabled_with_zero_ttl() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json=[])

    with patch("app.services.pluto_client.AUTOCOMPLETE_CACHE_TTL", 0), _client(handler) as client:
        fetch_address_matches(client, "broadway")
        fetch_address_matches(client, "broadway")

    assert calls == 2


def test_fallback_is_not_cached() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json=[])

    with _client(handler) as client:
        fetch_full_text_matches(client, "broadway")
        fetch_full_text_matches(client, "broadway")

    assert calls == 2


def test_error_object_is_returned_uncached() -> None:
    """SODA reports query errors as a JSON object; it is passed through and never cached."""
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(400, json={"error": True, "message": "query.soql.no-such-column"})

    with _client(handler) as client:
        assert fetch_address_matches(client, "broadway") == {"error": True, "message": "query.soql.no-such-column"}
        fetch_address_matches(client, "broadway")

    assert calls == 2


def test_non_json_body_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    with _client(handler) as client, pytest.raises(DatasetUnavailableError):
        fetch_address_matches(client, "broadway")


@pytest.mark.parametrize("exc_type", [httpx.ConnectError, httpx.ReadTimeout])
def test_transport_errors_raise(exc_type) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("upstream down", request=request)

    with _client(handler) as client, pytest.raises(DatasetUnavailableError):
        fetch_full_text_matches(client, "broadway")
