from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass
from typing import Optional, Sequence

from listing_sync.models import ListingRecord, RunSnapshot


# Jittered map coordinates change every run and must not count as a change
FINGERPRINT_EXCLUDE = {"coordinates"}


@dataclass(frozen=True)
class SnapshotDiff:
    previous_count: Optional[int]
    has_changes: bool
    fingerprint: str


def fingerprint(records: Sequence[ListingRecord]) -> str:
    """Order-sensitive digest of the serialised record set."""
    payload = [
        r.model_dump(mode="json", by_alias=True, exclude=FINGERPRINT_EXCLUDE) for r in records
    ]
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha1(blob.encode("utf-8")).hexdigest()


def diff_snapshot(records: Sequence[ListingRecord], previous: Optional[RunSnapshot]) -> SnapshotDiff:
    """Compare ``records`` with the last persisted snapshot.

    A first run (no previous snapshot or no stored hash) counts as changed.
    """
    digest = fingerprint(records)
    if previous is None:
        return SnapshotDiff(previous_count=None, has_changes=True, fingerprint=digest)
    previous_hash = previous.meta.content_hash
    return SnapshotDiff(
        previous_count=len(previous.listings),
        has_changes=previous_hash is None or previous_hash != digest,
        fingerprint=digest,
    )
