"""Pydantic models describing the GloBI interaction API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GlobiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class InteractionResponse(GlobiBaseModel):
    """Tabular page of interactions; ``data`` rows follow the ``columns`` order."""

    columns: list[str] = Field(default_factory=list)
    data: list[list[object]]

    @property
    def is_empty(self) -> bool:
        return not self.data
