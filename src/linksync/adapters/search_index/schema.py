"""Pydantic models for Elasticsearch-compatible bulk responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DOCUMENT_MISSING_STATUS = 404


class SearchIndexBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BulkItemResult(SearchIndexBaseModel):
    id: str = Field(alias="_id")
    status: int
    error: dict[str, object] | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None or self.status >= 300

    @property
    def document_missing(self) -> bool:
        return self.status == DOCUMENT_MISSING_STATUS


class BulkResponse(SearchIndexBaseModel):
    took: int = 0
    errors: bool
    items: list[dict[str, BulkItemResult]] = Field(default_factory=list)

    def results(self) -> list[BulkItemResult]:
        return [result for item in self.items for result in item.values()]


class OutlinkDocument(SearchIndexBaseModel):
    source: str
    url: str
