"""MockTransport plumbing for adapter tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import httpx

from linksync.adapters.http_resilience import ResilienceConfig, ResilientClient

type Handler = Callable[[httpx.Request], httpx.Response]


@dataclass(slots=True)
class RecordingSleep:
    delays: list[float] = field(default_factory=list[float])

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def make_client_factory(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
    def factory(resilience: ResilienceConfig) -> ResilientClient:
        return ResilientClient(resilience, transport=httpx.MockTransport(handler))

    return factory


def interaction_payload(*observation_ids: int) -> dict[str, object]:
    return {
        "columns": ["study_url"],
        "data": [
            [f"https://www.inaturalist.org/observations/{observation_id}"]
            for observation_id in observation_ids
        ],
    }
