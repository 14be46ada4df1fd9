"""Ports for fetching external interaction data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

type InteractionRecord = tuple[object, ...]


@dataclass(slots=True, frozen=True)
class InteractionPage:
    """One page of provider records, starting at offset ``skip``."""

    skip: int
    records: tuple[InteractionRecord, ...]

    def __len__(self) -> int:
        return len(self.records)


@runtime_checkable
class InteractionPageFetcher(Protocol):
    """Callable port yielding interaction pages until the provider runs dry."""

    def __call__(
        self,
        *,
        according_to: str,
        limit: int = 1000,
    ) -> Iterator[InteractionPage]: ...


__all__ = ["InteractionPage", "InteractionPageFetcher", "InteractionRecord"]
