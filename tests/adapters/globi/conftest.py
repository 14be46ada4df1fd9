"""Shared fixtures for GloBI adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from linksync.adapters.globi import GlobiClient
from linksync.adapters.http_resilience import ResilienceConfig, RetryPolicy
from linksync.config.globi import GlobiConfig
from tests.helpers.http import RecordingSleep, make_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable

    from tests.helpers.http import Handler

BASE_URL = "https://globi.test"


@pytest.fixture
def globi_config() -> GlobiConfig:
    return GlobiConfig(
        resilience=ResilienceConfig(
            name="globi-test",
            base_url=BASE_URL,
            retry=RetryPolicy(total=0),
        ),
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_globi_client(
    globi_config: GlobiConfig,
    recording_sleep: RecordingSleep,
) -> Callable[[Handler], GlobiClient]:
    def build(handler: Handler) -> GlobiClient:
        return GlobiClient(
            config=globi_config,
            client_factory=make_client_factory(handler),
            sleep=recording_sleep,
        )

    return build
