"""Public interface for the GloBI adapter."""

from __future__ import annotations

from .client import FetchRetriesExhaustedError, GlobiAPIError, GlobiClient
from .fetcher import GlobiInteractionFetcher
from .schema import InteractionResponse

__all__ = [
    "FetchRetriesExhaustedError",
    "GlobiAPIError",
    "GlobiClient",
    "GlobiInteractionFetcher",
    "InteractionResponse",
]
