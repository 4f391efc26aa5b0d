# dokdash/contracts/entry.py
"""
Flattened, display-ready view of one resource.

A ``ResourceEntry`` is derived from a ``Resource`` in its project,
environment and category context. Its ``id`` is what clients persist as a
pin, so it must stay stable across aggregations of the same upstream state.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dokdash.contracts.dokploy import Meta


class ResourceEntry(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    project_key: str
    title: str
    project_name: str
    environment_name: str | None = None
    section_label: str
    urls: list[str] = Field(default_factory=list)


class EntriesResponse(BaseModel):
    """Payload of ``GET /api/entries``."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    meta: Meta
    entries: list[ResourceEntry]
