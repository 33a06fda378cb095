"""End-to-end run: index page to validated snapshot."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol

from scrapy import Selector

from listing_sync.config import SyncConfig
from listing_sync.errors import NoListingsExtracted, ValidationFailed
from listing_sync.extract import IndexResult, locate_boundary, parse_card, parse_detail_page, parse_index
from listing_sync.models import ListingRecord, RunSnapshot, SnapshotMeta

from .differ import diff_snapshot
from .fetcher import Fetcher, HttpFetcher
from .geocode import CityGeocoder
from .validator import ListingValidator


log = logging.getLogger(__name__)

CARD_MODE = "card"
DETAIL_MODE = "detail"


class SnapshotStore(Protocol):
    def load(self) -> Optional[RunSnapshot]: ...

    def save(self, snapshot: RunSnapshot) -> None: ...


class ListingSync:
    """One synchronous pipeline run per call to :meth:`run`.

    ``run`` returns the new snapshot (already saved when a store is given) or
    raises a :class:`~listing_sync.errors.SyncError`; a rejected run never
    writes to the store.
    """

    def __init__(
        self,
        config: SyncConfig | None = None,
        fetcher: Optional[Fetcher] = None,
        store: Optional[SnapshotStore] = None,
        geocoder: Optional[CityGeocoder] = None,
        validator: Optional[ListingValidator] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or SyncConfig()
        self.log = logger or log
        self.fetcher = fetcher or HttpFetcher(self.config, logger=self.log)
        self.store = store
        self.geocoder = geocoder or CityGeocoder(jitter=self.config.jitter_degrees)
        self.validator = validator or ListingValidator.from_config(self.config)
        self._sleep = sleep
        self._clock = clock

    def run(self) -> RunSnapshot:
        started = self._clock()
        previous = self.store.load() if self.store is not None else None

        index_html = self.fetcher.fetch(self.config.listings_url)
        index = parse_index(Selector(text=index_html), logger=self.log)

        records: List[ListingRecord] = []
        if not index.no_inventory:
            if self.config.mode == CARD_MODE:
                records = self.extract_cards(index)
            else:
                records = self.extract_details(index)
            if not records:
                raise NoListingsExtracted(
                    f"No listings could be extracted from {len(index.anchors)} detail links"
                )

        records = [self.geocoder.enrich(r) for r in records]

        report = self.validator.validate(records)
        if not report.valid:
            self.log.error("Validation failed", extra={"data": {"errors": report.errors}})
            raise ValidationFailed(report.errors, report.warnings)
        if report.warnings:
            self.log.warning("Validation warnings", extra={"data": {"warnings": report.warnings}})

        diff = diff_snapshot(records, previous)
        snapshot = RunSnapshot(
            meta=SnapshotMeta(
                last_updated=datetime.now(timezone.utc),
                source=self.config.listings_url,
                listing_count=len(records),
                no_vacancies=index.no_inventory,
                previous_count=diff.previous_count,
                has_changes=diff.has_changes,
                content_hash=diff.fingerprint,
                scrape_duration_ms=int((self._clock() - started) * 1000),
                warnings=report.warnings,
                total_images=sum(len(r.images) for r in records),
            ),
            listings=records,
        )
        if self.store is not None:
            self.store.save(snapshot)
        self.log.info(
            "Snapshot complete",
            extra={"data": {"count": len(records), "hasChanges": diff.has_changes}},
        )
        return snapshot

    def extract_cards(self, index: IndexResult) -> List[ListingRecord]:
        """Build records from the index page itself, one located card per anchor."""
        records: List[ListingRecord] = []
        for anchor in index.anchors:
            container = locate_boundary(anchor.node, listing_id=anchor.listing_id)
            if container is None:
                self.log.warning(
                    "No listing boundary found; skipping", extra={"data": {"id": anchor.listing_id}}
                )
                continue
            try:
                records.append(parse_card(container, anchor.listing_id, self.config, anchor_text=anchor.text))
            except Exception as exc:
                self.log.warning(
                    "Failed to extract listing card: %s", exc, extra={"data": {"id": anchor.listing_id}}
                )
        return records

    def extract_details(self, index: IndexResult) -> List[ListingRecord]:
        """Fetch and parse each detail page in turn, pausing between requests."""
        records: List[ListingRecord] = []
        total = len(index.anchors)
        for i, anchor in enumerate(index.anchors):
            listing_id = anchor.listing_id
            try:
                self.log.info("Fetching detail page %d/%d", i + 1, total, extra={"data": {"id": listing_id}})
                html = self.fetcher.fetch(self.config.detail_url(listing_id))
                record = parse_detail_page(html, listing_id, self.config)
                records.append(record)
                self.log.info(
                    "Parsed listing: %s",
                    record.title,
                    extra={"data": {"images": len(record.images), "area": record.area, "price": record.price}},
                )
            except Exception as exc:
                self.log.warning(
                    "Failed to fetch detail page: %s", exc, extra={"data": {"id": listing_id}}
                )
            if i < total - 1:
                self._sleep(self.config.detail_delay_secs)
        return records
