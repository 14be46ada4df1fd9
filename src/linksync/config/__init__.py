"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .globi import GlobiConfig, get_globi_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .search_index import SearchIndexConfig, get_search_index_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "GlobiConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SearchIndexConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_globi_config",
    "get_search_index_config",
    "get_storage_config",
    "require_env_var",
    "require_env_vars",
]
