"""Port for refreshing observations in the search index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class SearchIndexer(Protocol):
    def reindex(self, observation_ids: Sequence[int], *, wait_for_refresh: bool = True) -> None:
        """Re-index the given observations; block until searchable when ``wait_for_refresh``."""
        ...
