"""HTTP client for the GloBI interaction API."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from linksync.adapters.http_resilience import ResilientClient
from linksync.config.globi import GlobiConfig

from .schema import InteractionResponse

if TYPE_CHECKING:
    from linksync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

INTERACTION_PATH = "/interaction"
STUDY_URL_FIELD = "study_url"

type Sleep = Callable[[float], Awaitable[None]]


class GlobiAPIError(RuntimeError):
    """Raised when the GloBI API returns a payload that cannot be used."""


class FetchRetriesExhaustedError(GlobiAPIError):
    """Raised when every attempt to fetch a page failed."""

    def __init__(self, message: str, *, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class GlobiClient:
    """Low-level HTTP client for GloBI with a fixed-delay retry budget.

    Every request is attempted up to ``config.fetch_attempts`` times, sleeping
    ``config.fetch_retry_delay_seconds`` between attempts, whenever the body is
    not JSON or the request fails. The default GloBI resilience config disables
    transport retries, so a page blocks for at most attempts x delay plus the
    request timeouts; a custom ``RetryPolicy`` multiplies the requests per attempt.
    """

    def __init__(
        self,
        *,
        config: GlobiConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config or GlobiConfig()
        self._resilience = self._config.resilience
        self._client_factory = client_factory or _default_client_factory
        self._sleep = sleep

    @property
    def config(self) -> GlobiConfig:
        return self._config

    def fetch_interactions(
        self,
        *,
        according_to: str,
        limit: int,
        skip: int,
    ) -> InteractionResponse:
        return asyncio.run(
            self._fetch_interactions_async(according_to=according_to, limit=limit, skip=skip)
        )

    def fetch_json(self, path: str, *, params: httpx.QueryParams) -> object:
        return asyncio.run(self._fetch_json_async(path, params=params))

    async def _fetch_interactions_async(
        self,
        *,
        according_to: str,
        limit: int,
        skip: int,
    ) -> InteractionResponse:
        params = httpx.QueryParams(
            {
                "accordingTo": according_to,
                "field": STUDY_URL_FIELD,
                "includeObservations": "true",
                "limit": limit,
                "skip": skip,
            }
        )
        payload = await self._fetch_json_async(INTERACTION_PATH, params=params)
        if not isinstance(payload, dict) or "data" not in payload:
            raise GlobiAPIError("Unexpected GloBI response payload: missing 'data'")
        try:
            return InteractionResponse.model_validate(payload)
        except ValidationError as exc:
            raise GlobiAPIError(f"Unexpected GloBI response payload: {exc}") from exc

    async def _fetch_json_async(self, path: str, *, params: httpx.QueryParams) -> object:
        attempts = self._config.fetch_attempts
        delay = self._config.fetch_retry_delay_seconds
        log.info("GET %s%s?%s", self._resilience.base_url or "", path, params)

        async with self._client_factory(self._resilience) as client:
            for attempt in range(1, attempts + 1):
                try:
                    response = await client.get(path, params=params)
                    response.raise_for_status()
                    return response.json()
                except (ValueError, httpx.HTTPError) as exc:
                    # ValueError covers JSONDecodeError and undecodable bodies
                    log.warning(
                        "GloBI request failed (attempt %s/%s): %s: %s",
                        attempt,
                        attempts,
                        type(exc).__name__,
                        exc,
                    )
                    if attempt == attempts:
                        raise FetchRetriesExhaustedError(
                            f"GloBI request to {path} failed after {attempts} attempts",
                            attempts=attempts,
                        ) from exc
                    await self._sleep(delay)

        raise FetchRetriesExhaustedError(
            f"GloBI request to {path} was not attempted",
            attempts=attempts,
        )
