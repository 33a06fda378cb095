"""Scrapy front end for the same extraction pipeline.

Run with ``scrapy runspider src/listing_sync/services/scraper.py -a mode=card -o out.jl``.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

import scrapy
from scrapy import Request
from scrapy.http import Response

from listing_sync.config import SyncConfig
from listing_sync.errors import StructureChanged
from listing_sync.extract import locate_boundary, parse_card, parse_detail_page, parse_index
from listing_sync.models import ListingRecord


class ListingSpider(scrapy.Spider):
    """Yields ``ListingRecord`` items from an AppFolio listings index."""

    name = "listings"
    custom_settings = {
        # One detail page at a time, with a polite gap
        "CONCURRENT_REQUESTS": 1,
        "DOWNLOAD_DELAY": SyncConfig.detail_delay_secs,
        "RANDOMIZE_DOWNLOAD_DELAY": False,
        "RETRY_TIMES": SyncConfig.max_retries,
        "LOG_LEVEL": "INFO",
        "LOG_FORMATTER": "listing_sync.utils.log.NoItemLogFormatter",
        "ITEM_PIPELINES": {"listing_sync.utils.pipelines.JsonifyRecords": 100},
    }

    def __init__(
        self,
        start_urls: Optional[Iterable[str] | str] = None,
        mode: Optional[str] = None,
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.config = SyncConfig()
        # Scrapy passes CLI args as strings; accept comma/space separated URLs
        parsed: list[str] = []
        if isinstance(start_urls, str):
            parsed = [p for p in re.split(r"[\s,]+", start_urls.strip()) if p]
        elif start_urls is not None:
            parsed = list(start_urls)
        self.start_urls = parsed or [self.config.listings_url]
        self.mode = (mode or self.config.mode).strip().lower()
        self.structure_changed = False

    def parse(self, response: Response, **kwargs: object) -> Iterator[ListingRecord | Request]:
        """Parse the index page into records (card mode) or detail requests."""
        try:
            index = parse_index(response.selector, logger=self.logger)  # type: ignore[arg-type]
        except StructureChanged as exc:
            self.structure_changed = True
            self.logger.error("%s (%s)", exc, response.url)
            return
        if index.no_inventory:
            return

        for anchor in index.anchors:
            if self.mode == "card":
                container = locate_boundary(anchor.node, listing_id=anchor.listing_id)
                if container is None:
                    self.logger.warning("No listing boundary for %s", anchor.listing_id)
                    continue
                yield parse_card(container, anchor.listing_id, self.config, anchor_text=anchor.text)
            else:
                yield response.follow(
                    self.config.detail_url(anchor.listing_id),
                    callback=self.parse_detail,
                    cb_kwargs={"listing_id": anchor.listing_id},
                )

    def parse_detail(self, response: Response, listing_id: str) -> Iterator[ListingRecord]:
        yield parse_detail_page(response.selector, listing_id, self.config)  # type: ignore[arg-type]
