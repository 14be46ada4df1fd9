"""Public interface for the search index adapter."""

from __future__ import annotations

from .client import SearchIndexClient, SearchIndexError, build_bulk_body, outlink_documents
from .schema import BulkItemResult, BulkResponse, OutlinkDocument

__all__ = [
    "BulkItemResult",
    "BulkResponse",
    "OutlinkDocument",
    "SearchIndexClient",
    "SearchIndexError",
    "build_bulk_body",
    "outlink_documents",
]
