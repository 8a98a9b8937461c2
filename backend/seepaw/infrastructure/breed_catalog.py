"""Resilient Breed Catalogue Client — fetches dog breeds over HTTP with retry and backoff.

Invariants:
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection, timeout): max_retries retries with exponential backoff
    - Client errors (4xx except 429): immediate failure, no retry
    - All failures mapped to ExternalServiceError (core/errors.py)
    - Returned entries are (name, description) with description ≤ 500 chars

Design Decisions:
    - Wrapper over raw httpx client: isolates retry logic from BreedHandlers (ADR: single responsibility)
    - ±25% jitter on backoff: prevents thundering herd on shared rate limits
    - temperament becomes the description: the catalogue has no free-text description field
"""

import asyncio
import random
import logging
from dataclasses import dataclass

import httpx

from seepaw.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

_SERVICE = "Breed catalogue"
_MAX_DESCRIPTION = 500
_MAX_NAME = 100


@dataclass(frozen=True)
class CatalogBreed:
    name: str
    description: str | None


def parse_breeds(payload) -> list[CatalogBreed]:
    """Keep entries with a usable name; temperament → description."""
    if not isinstance(payload, list):
        raise ExternalServiceError("unexpected response shape", _SERVICE)
    breeds = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        name = (entry.get("name") or "").strip()
        if not name or len(name) > _MAX_NAME:
            continue
        temperament = (entry.get("temperament") or "").strip()
        breeds.append(CatalogBreed(
            name=name,
            description=temperament[:_MAX_DESCRIPTION] or None,
        ))
    return breeds


class BreedCatalogClient:
    """Wraps httpx.AsyncClient with retry logic, timeouts, and error mapping."""

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
        max_retries: int = 3,
        base_delay_ms: int = 500,
        max_delay_ms: int = 10_000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.headers = {"x-api-key": api_key} if api_key else {}
        self.timeout_seconds = timeout_seconds
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self._transport = transport

    async def fetch_breeds(self) -> list[CatalogBreed]:
        """GET the catalogue with automatic retry on transient failures."""
        async with httpx.AsyncClient(
            timeout=self.timeout_seconds, transport=self._transport,
        ) as client:
            for attempt in range(self.max_retries + 1):
                try:
                    response = await client.get(self.url, headers=self.headers)
                    if response.status_code == 429:
                        await self._handle_rate_limit(response, attempt)
                        continue
                    if response.status_code >= 500:
                        await self._handle_transient_error(
                            f"HTTP {response.status_code}", attempt,
                        )
                        continue
                    if response.status_code >= 400:
                        raise ExternalServiceError(
                            f"HTTP {response.status_code}", _SERVICE,
                        )
                    breeds = parse_breeds(response.json())
                    logger.info(
                        f"Fetched {len(breeds)} breeds from catalogue",
                        extra={"attempt": attempt + 1},
                    )
                    return breeds

                except (httpx.TransportError, httpx.TimeoutException) as e:
                    await self._handle_transient_error(str(e) or type(e).__name__, attempt)

                except ValueError as e:
                    raise ExternalServiceError(f"invalid JSON: {e}", _SERVICE)

        raise ExternalServiceError("retries exhausted", _SERVICE)

    async def _handle_rate_limit(self, response: httpx.Response, attempt: int):
        retry_after_ms = self._parse_retry_after(response)
        if attempt >= self.max_retries:
            raise ExternalServiceError(
                "rate limit exceeded", _SERVICE, retry_after_ms=retry_after_ms,
            )
        delay = retry_after_ms or self._calculate_backoff(attempt)
        logger.warning(
            f"Breed catalogue rate limited, retrying in {delay}ms",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(self, reason: str, attempt: int):
        if attempt >= self.max_retries:
            raise ExternalServiceError(reason, _SERVICE)
        delay = self._calculate_backoff(attempt)
        logger.warning(
            f"Breed catalogue transient error ({reason}), retrying in {delay}ms",
            extra={"attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _calculate_backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.base_delay_ms * (2 ** attempt), self.max_delay_ms)
        jitter = delay * 0.25 * (2 * random.random() - 1)
        return int(delay + jitter)

    def _parse_retry_after(self, response: httpx.Response) -> int | None:
        value = response.headers.get("retry-after")
        if value is None:
            return None
        try:
            return int(float(value) * 1000)
        except ValueError:
            return None
