"""Data models for extracted listings."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


AVAILABLE_NOW = "Now"
AVAILABILITY_UNSPECIFIED = "Contact for availability"
DEFAULT_CATEGORY = "Commercial"


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class ListingRecord(BaseModel):
    """One commercial unit discovered on the listings site.

    Records are immutable once assembled; enrichment produces a copy with
    ``coordinates`` filled in.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    address: Optional[str] = None
    city: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    lease_type: Optional[str] = None
    price: Optional[float] = None
    area: Optional[int] = None
    price_per_area_annualized: Optional[float] = None
    description: str = ""
    availability: str = AVAILABILITY_UNSPECIFIED
    utilities: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    detail_url: str
    action_url: str
    coordinates: Optional[Coordinates] = None

    @computed_field(alias="derivedStatus")  # type: ignore[misc]
    @property
    def derived_status(self) -> str:
        return "available" if self.availability == AVAILABLE_NOW else "pending"

    @computed_field(alias="primaryImage")  # type: ignore[misc]
    @property
    def primary_image(self) -> Optional[str]:
        return self.images[0] if self.images else None
