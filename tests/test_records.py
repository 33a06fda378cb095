from __future__ import annotations

from scrapy import Selector

from listing_sync.extract import annualized_rate, locate_boundary, parse_card, parse_detail_page, parse_index
from listing_sync.models import AVAILABLE_NOW

from conftest import DETAIL_HTML, ID_A, ID_B, INDEX_HTML, SPARSE_DETAIL_HTML


def _cards(config):
    index = parse_index(INDEX_HTML)
    return [
        parse_card(locate_boundary(a.node, listing_id=a.listing_id), a.listing_id, config, anchor_text=a.text)
        for a in index.anchors
    ]


def test_card_record_fields(config) -> None:
    first, second = _cards(config)
    assert first.id == ID_A
    assert first.title == "Suite 200 Office Space"
    assert first.price == 2500
    assert first.area == 1200
    assert first.price_per_area_annualized == 25.00
    assert first.address == "123 Main St, Charlotte, NC 28202"
    assert first.city == "Charlotte"
    assert first.category == "Office"
    assert first.availability == AVAILABLE_NOW
    assert first.derived_status == "available"
    assert first.images == [f"https://images.cdn.appfolio.com/greyrock/images/{ID_A[:4]}/medium.jpg"]
    assert first.detail_url == f"https://greyrockcommercial.appfolio.com/listings/detail/{ID_A}"
    assert "listable_uid=" + ID_A in first.action_url
    assert first.coordinates is None

    assert second.id == ID_B
    assert second.city == "Matthews"
    assert second.price == 3150
    assert second.price_per_area_annualized == 21.0


def test_card_fragment_scenario(config) -> None:
    html = f'<div class="listing-item"><a href="/listings/detail/{ID_A}">Unit</a><p>$2,500</p><p>1,200 SF</p></div>'
    container = Selector(text=html).css("div.listing-item")[0]
    record = parse_card(container, ID_A, config)
    assert record.price == 2500
    assert record.area == 1200
    assert record.price_per_area_annualized == 25.00


def test_detail_record_fields(config) -> None:
    record = parse_detail_page(DETAIL_HTML, ID_A, config)
    assert record.title == "Flex Warehouse with Loading Dock"
    assert record.price == 4800
    assert record.area == 3200
    # Stated on the page; the derived 18.00 must not replace it
    assert record.price_per_area_annualized == 21.5
    assert record.address == "4500 Industrial Pkwy, Concord, NC 28027"
    assert record.city == "Concord"
    assert record.category == "Industrial"
    assert record.lease_type == "NNN"
    assert record.utilities == "Water, Trash"
    assert record.availability == "3/1/2026"
    assert record.derived_status == "pending"
    assert len(record.images) == 2
    assert record.primary_image == record.images[0]


def test_detail_area_not_taken_from_rent(config) -> None:
    html = "<h2>Office Suite</h2><dl><dt>RENT</dt><dd>$2,500</dd><dt>Square Feet</dt><dd>1,200</dd></dl>"
    record = parse_detail_page(html, ID_A, config)
    assert record.price == 2500
    assert record.area == 1200
    assert record.price_per_area_annualized == 25.0


def test_sparse_detail_record(config) -> None:
    record = parse_detail_page(SPARSE_DETAIL_HTML, ID_B, config)
    assert record.title == "Corner Retail Bay"
    assert record.price is None
    assert record.area is None
    assert record.price_per_area_annualized is None
    assert record.address is None
    assert record.city is None
    assert record.category == "Retail"
    assert record.availability == "June 2026"
    assert record.derived_status == "pending"


def test_title_never_empty(config) -> None:
    record = parse_detail_page("<html><body><div>?</div></body></html>", "0123456789abcdef", config)
    assert record.title == "Listing 01234567"
    assert record.description == ""
    assert record.images == []


def test_annualized_rate() -> None:
    assert annualized_rate(2500, 1200) == 25.0
    assert annualized_rate(1000, 3) == 4000.0
    assert annualized_rate(None, 1200) is None
    assert annualized_rate(2500, None) is None
    assert annualized_rate(2500, 0) is None


def test_record_serialises_with_camel_case_aliases(config) -> None:
    record = parse_detail_page(DETAIL_HTML, ID_A, config)
    data = record.model_dump(mode="json", by_alias=True)
    assert data["pricePerAreaAnnualized"] == 21.5
    assert data["leaseType"] == "NNN"
    assert data["derivedStatus"] == "pending"
    assert data["detailUrl"].endswith(ID_A)
