"""Assemble :class:`ListingRecord` objects from a card or a detail page."""

from __future__ import annotations

from typing import Optional

from scrapy import Selector

from listing_sync.config import SyncConfig
from listing_sync.models import ListingRecord

from .fields import (
    city_from_address,
    extract_address,
    extract_area,
    extract_availability,
    extract_category,
    extract_description,
    extract_images,
    extract_lease_type,
    extract_price,
    extract_rate,
    extract_title,
    extract_utilities,
)
from .scope import CARD_PROFILE, DETAIL_PROFILE, Scope


def annualized_rate(price: Optional[float], area: Optional[int]) -> Optional[float]:
    """Yearly price per unit of area derived from a monthly price."""
    if price is None or not area:
        return None
    return round(price / area * 12, 2)


def build_record(scope: Scope, config: SyncConfig) -> ListingRecord:
    listing_id = scope.listing_id
    price = extract_price(scope)
    area = extract_area(scope)
    # A rate stated on the page is never replaced by the derived one
    rate = extract_rate(scope)
    if rate is None:
        rate = annualized_rate(price, area)
    address = extract_address(scope)

    return ListingRecord(
        id=listing_id,
        title=extract_title(scope) or f"Listing {listing_id[:8]}",
        address=address,
        city=city_from_address(address),
        category=extract_category(scope),
        lease_type=extract_lease_type(scope),
        price=price,
        area=area,
        price_per_area_annualized=rate,
        description=extract_description(scope) or "",
        availability=extract_availability(scope),
        utilities=extract_utilities(scope),
        images=extract_images(scope),
        detail_url=config.detail_url(listing_id),
        action_url=config.action_url(listing_id),
    )


def parse_card(
    container: Selector,
    listing_id: str,
    config: SyncConfig,
    anchor_text: Optional[str] = None,
) -> ListingRecord:
    """Record from one index-page card located by the boundary locator."""
    scope = Scope(
        sel=container,
        profile=CARD_PROFILE,
        listing_id=listing_id,
        anchor_text=anchor_text,
        base_url=config.base_url,
    )
    return build_record(scope, config)


def parse_detail_page(html: str | Selector, listing_id: str, config: SyncConfig) -> ListingRecord:
    """Record from a listing's own detail page (gallery and full description)."""
    sel = Selector(text=html) if isinstance(html, str) else html
    scope = Scope(sel=sel, profile=DETAIL_PROFILE, listing_id=listing_id, base_url=config.base_url)
    return build_record(scope, config)
