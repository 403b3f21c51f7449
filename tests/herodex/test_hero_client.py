"""Tests for catalog fetching, error classification and derived queries."""

from __future__ import annotations

import random
from typing import Any

import httpx
import pytest

from herodex.schemas.error import (
    DecodingError,
    ErrorType,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    UnknownAPIError,
)
from herodex.services.hero_client import HeroClient, filter_heroes, pick_random_hero
from herodex.settings import AppSettings
from tests.herodex.support.heroes import (
    CATALOG_URL,
    catalog_transport,
    failing_transport,
    make_hero,
)


def _client(transport: httpx.MockTransport, **kwargs: Any) -> HeroClient:
    return HeroClient(
        url=CATALOG_URL,
        client=httpx.AsyncClient(transport=transport),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_fetch_all_heroes_decodes_catalog(
    catalog_payload: list[dict[str, Any]],
) -> None:
    requests: list[httpx.Request] = []
    client = _client(catalog_transport(catalog_payload, requests=requests))

    heroes = await client.fetch_all_heroes()

    assert [hero.id for hero in heroes] == [1, 2, 3]
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert str(requests[0].url) == CATALOG_URL


@pytest.mark.asyncio
async def test_every_call_refetches_the_catalog(
    catalog_payload: list[dict[str, Any]],
) -> None:
    requests: list[httpx.Request] = []
    client = _client(catalog_transport(catalog_payload, requests=requests))

    await client.fetch_all_heroes()
    await client.search_heroes("bat")
    await client.fetch_random_hero()

    assert len(requests) == 3


@pytest.mark.asyncio
async def test_http_500_yields_http_error_with_code() -> None:
    client = _client(catalog_transport(b"not even json", status_code=500))

    with pytest.raises(HTTPStatusError) as excinfo:
        await client.fetch_all_heroes()

    assert excinfo.value.status_code == 500
    assert excinfo.value.error_type is ErrorType.HTTP_ERROR
    assert excinfo.value.description == "HTTP Error: 500"


@pytest.mark.asyncio
async def test_redirect_status_is_treated_as_failure() -> None:
    client = _client(catalog_transport(b"[]", status_code=304))

    with pytest.raises(HTTPStatusError) as excinfo:
        await client.fetch_all_heroes()

    assert excinfo.value.status_code == 304


@pytest.mark.asyncio
async def test_malformed_json_yields_decoding_error() -> None:
    client = _client(catalog_transport(b"[{\"id\": 1,"))

    with pytest.raises(DecodingError) as excinfo:
        await client.fetch_all_heroes()

    assert excinfo.value.cause is not None
    assert excinfo.value.description.startswith("Failed to decode data:")


@pytest.mark.asyncio
async def test_schema_mismatch_yields_decoding_error() -> None:
    client = _client(catalog_transport([{"id": 1, "name": "Incomplete"}]))

    with pytest.raises(DecodingError):
        await client.fetch_all_heroes()


@pytest.mark.asyncio
async def test_missing_response_frame_yields_invalid_response() -> None:
    client = _client(
        failing_transport(
            lambda request: httpx.RemoteProtocolError(
                "Server disconnected without sending a response.", request=request
            )
        )
    )

    with pytest.raises(InvalidResponseError) as excinfo:
        await client.fetch_all_heroes()

    assert excinfo.value.description == "Invalid response from server"


@pytest.mark.asyncio
async def test_transport_failure_yields_unknown_error() -> None:
    client = _client(
        failing_transport(
            lambda request: httpx.ConnectError("connection refused", request=request)
        )
    )

    with pytest.raises(UnknownAPIError) as excinfo:
        await client.fetch_all_heroes()

    assert isinstance(excinfo.value.cause, httpx.ConnectError)
    assert excinfo.value.error_type is ErrorType.UNKNOWN


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "not a url", "ftp://heroes.test/all.json", "https://"])
async def test_unbuildable_url_yields_invalid_url(url: str) -> None:
    requests: list[httpx.Request] = []
    client = HeroClient(
        url=url,
        client=httpx.AsyncClient(transport=catalog_transport([], requests=requests)),
    )

    with pytest.raises(InvalidURLError):
        await client.fetch_all_heroes()

    assert requests == []


@pytest.mark.asyncio
async def test_search_with_empty_query_returns_full_catalog(
    catalog_payload: list[dict[str, Any]],
) -> None:
    client = _client(catalog_transport(catalog_payload))

    heroes = await client.search_heroes("")

    assert [hero.id for hero in heroes] == [1, 2, 3]


@pytest.mark.asyncio
async def test_search_is_case_insensitive_substring(
    catalog_payload: list[dict[str, Any]],
) -> None:
    client = _client(catalog_transport(catalog_payload))

    heroes = await client.search_heroes("bat")

    assert [hero.id for hero in heroes] == [1, 3]


@pytest.mark.asyncio
async def test_search_matches_full_name(
    catalog_payload: list[dict[str, Any]],
) -> None:
    client = _client(catalog_transport(catalog_payload))

    heroes = await client.search_heroes("KENT")

    assert [hero.id for hero in heroes] == [2]


@pytest.mark.asyncio
async def test_search_without_matches_returns_empty(
    catalog_payload: list[dict[str, Any]],
) -> None:
    client = _client(catalog_transport(catalog_payload))

    assert await client.search_heroes("zzz") == []


@pytest.mark.asyncio
async def test_random_hero_on_empty_catalog_is_none() -> None:
    client = _client(catalog_transport([]))

    assert await client.fetch_random_hero() is None


@pytest.mark.asyncio
async def test_random_hero_comes_from_catalog(
    catalog_payload: list[dict[str, Any]], seeded_rng: random.Random
) -> None:
    client = _client(catalog_transport(catalog_payload), rng=seeded_rng)

    hero = await client.fetch_random_hero()

    assert hero is not None
    assert hero.id in {1, 2, 3}


@pytest.mark.asyncio
async def test_random_hero_propagates_fetch_errors() -> None:
    client = _client(catalog_transport(b"", status_code=404))

    with pytest.raises(HTTPStatusError):
        await client.fetch_random_hero()


@pytest.mark.asyncio
async def test_context_manager_closes_owned_client() -> None:
    async with HeroClient(url=CATALOG_URL) as client:
        owned = client._client
        assert owned is not None

    assert owned.is_closed
    assert client._client is None


@pytest.mark.asyncio
async def test_injected_client_is_left_open() -> None:
    http_client = httpx.AsyncClient(transport=catalog_transport([]))

    async with HeroClient(url=CATALOG_URL, client=http_client):
        pass

    assert not http_client.is_closed
    await http_client.aclose()


def test_default_url_comes_from_settings() -> None:
    configured = AppSettings(api_base_url="https://mirror.test/api/")

    client = HeroClient(active_settings=configured)

    assert client.url == "https://mirror.test/api/all.json"


def test_filter_heroes_helper() -> None:
    heroes = [make_hero(1, "Batman"), make_hero(2, "Superman"), make_hero(3, "batwoman")]

    assert filter_heroes(heroes, "") == heroes
    assert [hero.id for hero in filter_heroes(heroes, "MAN")] == [1, 2, 3]
    assert [hero.id for hero in filter_heroes(heroes, "super")] == [2]


def test_pick_random_hero_covers_catalog() -> None:
    heroes = [make_hero(1, "Batman"), make_hero(2, "Superman")]
    rng = random.Random(0)

    picks = {pick_random_hero(heroes, rng).id for _ in range(50)}  # type: ignore[union-attr]

    assert picks == {1, 2}
    assert pick_random_hero([], rng) is None


@pytest.mark.asyncio
async def test_redirects_are_followed_before_status_check(
    catalog_payload: list[dict[str, Any]],
) -> None:
    moved_to = "https://mirror.heroes.test/api/all.json"

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == CATALOG_URL:
            return httpx.Response(301, headers={"Location": moved_to})
        return httpx.Response(200, json=catalog_payload)

    client = _client(httpx.MockTransport(handler))

    heroes = await client.fetch_all_heroes()

    assert [hero.id for hero in heroes] == [1, 2, 3]
