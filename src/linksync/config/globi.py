"""GloBI provider configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_float, optional_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

GLOBI_BASE_URL = "https://api.globalbioticinteractions.org"
GLOBI_DEFAULT_ACCORDING_TO = "globi:globalbioticinteractions/inaturalist"
GLOBI_HREF_NAME = "GloBI"
GLOBI_PAGE_SIZE = 1000
GLOBI_FETCH_ATTEMPTS = 10
GLOBI_FETCH_RETRY_DELAY_SECONDS = 10.0
GLOBI_TIMEOUT_SECONDS = 60.0
DEFAULT_SITE_URL = "https://www.inaturalist.org"


def _default_resilience(base_url: str = GLOBI_BASE_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="globi",
        base_url=base_url,
        timeout_seconds=GLOBI_TIMEOUT_SECONDS,
        # the fixed-delay attempt loop in GlobiClient is the only retry budget
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )


@dataclass(frozen=True, slots=True)
class GlobiConfig:
    """Where and how to read GloBI interactions, and how to shape the resulting links."""

    according_to: str = GLOBI_DEFAULT_ACCORDING_TO
    href_name: str = GLOBI_HREF_NAME
    page_size: int = GLOBI_PAGE_SIZE
    fetch_attempts: int = GLOBI_FETCH_ATTEMPTS
    fetch_retry_delay_seconds: float = GLOBI_FETCH_RETRY_DELAY_SECONDS
    observation_url_template: str = f"{DEFAULT_SITE_URL}/observations/{{observation_id}}"
    resilience: ResilienceConfig = field(default_factory=_default_resilience)


def get_globi_config(*, resilience: ResilienceConfig | None = None) -> GlobiConfig:
    base_url = optional_env_var("GLOBI_BASE_URL", GLOBI_BASE_URL).rstrip("/")
    site_url = optional_env_var("LINKSYNC_SITE_URL", DEFAULT_SITE_URL).rstrip("/")
    return GlobiConfig(
        according_to=optional_env_var("GLOBI_ACCORDING_TO", GLOBI_DEFAULT_ACCORDING_TO),
        fetch_retry_delay_seconds=optional_env_float(
            "GLOBI_FETCH_RETRY_DELAY_SECONDS",
            GLOBI_FETCH_RETRY_DELAY_SECONDS,
        ),
        observation_url_template=f"{site_url}/observations/{{observation_id}}",
        resilience=resilience or _default_resilience(base_url),
    )
