from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .listing import ListingRecord


SNAPSHOT_VERSION = "2.0.0"


class SnapshotMeta(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    last_updated: datetime
    source: str
    listing_count: int = 0
    no_vacancies: bool = False
    previous_count: Optional[int] = None
    has_changes: bool = True
    content_hash: Optional[str] = None
    scrape_duration_ms: int = 0
    warnings: List[str] = Field(default_factory=list)
    total_images: int = 0
    version: str = SNAPSHOT_VERSION


class RunSnapshot(BaseModel):
    """Output of one successful run; the previous one feeds the next run's diff."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    meta: SnapshotMeta
    listings: List[ListingRecord] = Field(default_factory=list)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
