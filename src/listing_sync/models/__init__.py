from .listing import (
    AVAILABILITY_UNSPECIFIED,
    AVAILABLE_NOW,
    DEFAULT_CATEGORY,
    Coordinates,
    ListingRecord,
)
from .snapshot import SNAPSHOT_VERSION, RunSnapshot, SnapshotMeta

__all__ = [
    "AVAILABILITY_UNSPECIFIED",
    "AVAILABLE_NOW",
    "DEFAULT_CATEGORY",
    "Coordinates",
    "ListingRecord",
    "RunSnapshot",
    "SNAPSHOT_VERSION",
    "SnapshotMeta",
]
