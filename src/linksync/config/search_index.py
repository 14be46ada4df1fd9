"""Search index configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

DEFAULT_INDEX_NAME = "observations"
SEARCH_INDEX_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True, slots=True)
class SearchIndexConfig:
    index_name: str
    resilience: ResilienceConfig


def get_search_index_config(*, resilience: ResilienceConfig | None = None) -> SearchIndexConfig:
    values = require_env_vars(("SEARCH_INDEX_URL",))
    base_url = values["SEARCH_INDEX_URL"].rstrip("/")
    return SearchIndexConfig(
        index_name=optional_env_var("SEARCH_INDEX_NAME", DEFAULT_INDEX_NAME),
        resilience=resilience
        or ResilienceConfig(
            name="search-index",
            base_url=base_url,
            # refresh=wait_for blocks until the next index refresh
            timeout_seconds=SEARCH_INDEX_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            default_headers={"Accept": "application/json"},
        ),
    )
