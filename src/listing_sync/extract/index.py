"""Listing-index page parsing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from scrapy import Selector

from listing_sync.errors import StructureChanged

from .scope import node_text


log = logging.getLogger(__name__)

DETAIL_LINK_CSS = 'a[href*="/listings/detail/"]'
DETAIL_LINK_RE = re.compile(r"/listings/detail/([A-Fa-f0-9-]+)")
NO_INVENTORY_PHRASES = ("no available properties", "no vacancies found", "no vacancies")


@dataclass(frozen=True)
class ListingAnchor:
    listing_id: str
    href: str
    node: Selector

    @property
    def text(self) -> str:
        return node_text(self.node)


@dataclass(frozen=True)
class IndexResult:
    """Either a non-empty set of anchors or the no-inventory state."""

    anchors: Tuple[ListingAnchor, ...] = ()

    @property
    def no_inventory(self) -> bool:
        return not self.anchors

    @property
    def listing_ids(self) -> List[str]:
        return [a.listing_id for a in self.anchors]


def listing_id_from_href(href: Optional[str], pattern: "re.Pattern[str]" = DETAIL_LINK_RE) -> Optional[str]:
    m = pattern.search(href or "")
    return m.group(1).lower() if m else None


def has_no_inventory_notice(doc: Selector, phrases: Iterable[str] = NO_INVENTORY_PHRASES) -> bool:
    body = doc.xpath("//body")
    text = node_text(body[0] if body else doc).lower()
    return any(phrase.lower() in text for phrase in phrases)


def parse_index(
    doc: Selector | str,
    *,
    link_css: str = DETAIL_LINK_CSS,
    link_pattern: "re.Pattern[str]" = DETAIL_LINK_RE,
    no_inventory_phrases: Iterable[str] = NO_INVENTORY_PHRASES,
    logger: Optional[logging.Logger] = None,
) -> IndexResult:
    """Find one anchor per listing on the index page.

    Anchors are de-duplicated by listing id in first-seen order. A page with
    no detail links is only accepted as empty when it carries one of
    ``no_inventory_phrases``; otherwise :class:`StructureChanged` is raised.
    """
    logger = logger or log
    if isinstance(doc, str):
        doc = Selector(text=doc)

    anchors: List[ListingAnchor] = []
    seen: set[str] = set()
    for node in doc.css(link_css):
        href = node.attrib.get("href") or ""
        listing_id = listing_id_from_href(href, link_pattern)
        if not listing_id or listing_id in seen:
            continue
        seen.add(listing_id)
        anchors.append(ListingAnchor(listing_id=listing_id, href=href, node=node))

    if anchors:
        logger.info(
            "Found %d unique listings on index page",
            len(anchors),
            extra={"data": {"ids": [a.listing_id for a in anchors]}},
        )
        return IndexResult(tuple(anchors))

    if has_no_inventory_notice(doc, no_inventory_phrases):
        logger.info("Index page reports no current vacancies")
        return IndexResult()

    raise StructureChanged("Could not find listing detail links or vacancy status")
