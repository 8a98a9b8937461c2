"""Breed catalogue client — retry, backoff and error mapping over httpx.

Invariants:
    - 5xx, 429 and transport errors are retried up to max_retries
    - Other 4xx fail immediately
    - Every failure surfaces as ExternalServiceError
    - Entries without a usable name are skipped; temperament becomes the description
"""

import httpx
import pytest

from seepaw.core.errors import ExternalServiceError
from seepaw.infrastructure.breed_catalog import BreedCatalogClient, parse_breeds

URL = "https://catalog.test/v1/breeds"


def _client(responses, max_retries=2):
    """Client whose transport replays `responses` (httpx.Response or exception) in order."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        outcome = responses[min(len(calls), len(responses)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client = BreedCatalogClient(
        URL,
        api_key="secret",
        max_retries=max_retries,
        base_delay_ms=1,
        transport=httpx.MockTransport(handler),
    )
    return client, calls


async def test_success_parses_breeds():
    client, calls = _client([
        httpx.Response(200, json=[{"name": "Beagle", "temperament": "Merry"}]),
    ])

    breeds = await client.fetch_breeds()

    assert [(b.name, b.description) for b in breeds] == [("Beagle", "Merry")]
    assert calls[0].headers["x-api-key"] == "secret"


async def test_server_error_retried_then_succeeds():
    client, calls = _client([
        httpx.Response(503),
        httpx.Response(200, json=[{"name": "Akita"}]),
    ])

    breeds = await client.fetch_breeds()

    assert [b.name for b in breeds] == ["Akita"]
    assert len(calls) == 2


async def test_connection_error_retried():
    client, calls = _client([
        httpx.ConnectError("refused"),
        httpx.Response(200, json=[]),
    ])
    assert await client.fetch_breeds() == []
    assert len(calls) == 2


async def test_rate_limit_retried_with_retry_after():
    client, calls = _client([
        httpx.Response(429, headers={"retry-after": "0.001"}),
        httpx.Response(200, json=[{"name": "Pug"}]),
    ])
    assert [b.name for b in await client.fetch_breeds()] == ["Pug"]
    assert len(calls) == 2


async def test_rate_limit_exhausted_carries_retry_after():
    client, calls = _client([httpx.Response(429, headers={"retry-after": "0.002"})], max_retries=1)

    with pytest.raises(ExternalServiceError) as exc_info:
        await client.fetch_breeds()

    assert exc_info.value.context.retry_after_ms == 2
    assert len(calls) == 2


async def test_client_error_not_retried():
    client, calls = _client([httpx.Response(401)])

    with pytest.raises(ExternalServiceError) as exc_info:
        await client.fetch_breeds()

    assert "HTTP 401" in exc_info.value.message
    assert len(calls) == 1


async def test_retries_exhausted():
    client, calls = _client([httpx.Response(500)], max_retries=2)

    with pytest.raises(ExternalServiceError):
        await client.fetch_breeds()

    assert len(calls) == 3


async def test_invalid_json_fails():
    client, _ = _client([httpx.Response(200, content=b"<html>")])
    with pytest.raises(ExternalServiceError):
        await client.fetch_breeds()


def test_parse_breeds_skips_unusable_entries():
    breeds = parse_breeds([
        {"name": "  Boxer  ", "temperament": "x" * 600},
        {"name": ""},
        {"temperament": "Nameless"},
        "not-a-dict",
        {"name": "y" * 101},
    ])
    assert [b.name for b in breeds] == ["Boxer"]
    assert len(breeds[0].description) == 500


def test_parse_breeds_rejects_non_list():
    with pytest.raises(ExternalServiceError):
        parse_breeds({"breeds": []})
