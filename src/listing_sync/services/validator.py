from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from listing_sync.config import SyncConfig
from listing_sync.models import ListingRecord


@dataclass
class ValidationReport:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


class ListingValidator:
    """Sanity rules over an assembled record set.

    Warnings flag records that look incomplete or implausible and never
    affect validity. Errors flag a run that should not replace the previous
    snapshot.
    """

    def __init__(
        self,
        max_listings: int = 200,
        suspicious_price: float = 1_000_000,
        suspicious_area: float = 1_000_000,
    ) -> None:
        self.max_listings = max_listings
        self.suspicious_price = suspicious_price
        self.suspicious_area = suspicious_area

    @classmethod
    def from_config(cls, config: SyncConfig) -> "ListingValidator":
        return cls(
            max_listings=config.max_listings,
            suspicious_price=config.suspicious_price,
            suspicious_area=config.suspicious_area,
        )

    def validate(self, records: Sequence[ListingRecord]) -> ValidationReport:
        report = ValidationReport()
        for record in records:
            report.warnings.extend(self.record_warnings(record))
        if len(records) > self.max_listings:
            report.errors.append(f"Unexpectedly high listing count: {len(records)}")
        return report

    def record_warnings(self, record: ListingRecord) -> List[str]:
        prefix = f"Listing {record.id}"
        warnings: List[str] = []
        if not record.address:
            warnings.append(f"{prefix}: missing address")
        if record.price is None:
            warnings.append(f"{prefix}: missing price")
        if not record.area:
            warnings.append(f"{prefix}: missing area")
        if not record.images:
            warnings.append(f"{prefix}: no images found")
        if record.price is not None and record.price > self.suspicious_price:
            warnings.append(f"{prefix}: suspiciously high price ${record.price:,.2f}")
        if record.area and record.area > self.suspicious_area:
            warnings.append(f"{prefix}: suspiciously large area {record.area:,}")
        return warnings
