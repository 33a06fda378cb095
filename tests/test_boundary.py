from __future__ import annotations

from scrapy import Selector

from listing_sync.extract import BoundaryRules, locate_boundary, parse_index

from conftest import ID_A, ID_B, INDEX_HTML


def _anchor(html: str, listing_id: str = ID_A) -> Selector:
    return Selector(text=html).css(f'a[href*="{listing_id}"]')[0]


def test_marker_class_boundary() -> None:
    index = parse_index(INDEX_HTML)
    for anchor in index.anchors:
        container = locate_boundary(anchor.node, listing_id=anchor.listing_id)
        assert container is not None
        assert "listing-item" in container.attrib["class"].split()
        assert anchor.listing_id in container.get()


def test_listing_substring_class_boundary() -> None:
    html = f"""
    <html><body><section class="grid">
      <div class="property-listing-card"><h3>Flex Space</h3><a href="/listings/detail/{ID_A}">Go</a></div>
      <div class="property-listing-card"><h3>Office</h3><a href="/listings/detail/{ID_B}">Go</a></div>
    </section></body></html>
    """
    container = locate_boundary(_anchor(html), listing_id=ID_A)
    assert container is not None
    assert "Flex Space" in container.get()
    assert ID_B not in container.get()


def test_list_item_boundary() -> None:
    html = f"""
    <html><body><ul>
      <li><span><a href="/listings/detail/{ID_A}">Unit A</a></span></li>
      <li><span><a href="/listings/detail/{ID_B}">Unit B</a></span></li>
    </ul></body></html>
    """
    container = locate_boundary(_anchor(html), listing_id=ID_A)
    assert container is not None
    assert container.root.tag == "li"


def test_shared_listing_container_is_skipped() -> None:
    html = f"""
    <html><body><div class="listings">
      <ul>
        <li><a href="/listings/detail/{ID_A}">Unit A</a></li>
        <li><a href="/listings/detail/{ID_B}">Unit B</a></li>
      </ul>
    </div></body></html>
    """
    container = locate_boundary(_anchor(html), listing_id=ID_A)
    assert container is not None
    assert container.root.tag == "li"


def test_upward_walk_boundary() -> None:
    html = f"""
    <html><body><main>
      <div>
        <h3>Warehouse with yard</h3>
        <p>Fenced outdoor storage yard and two grade-level doors off the interstate.</p>
        <div><a href="/listings/detail/{ID_A}">Details</a><a href="/apply/{ID_A}">Apply</a></div>
      </div>
    </main></body></html>
    """
    container = locate_boundary(_anchor(html), listing_id=ID_A)
    assert container is not None
    assert "Warehouse with yard" in container.get()
    assert container.root.tag == "div"


def test_upward_walk_respects_hop_limit() -> None:
    inner = f'<a href="/listings/detail/{ID_A}">Details</a><a href="/x">x</a>'
    for _ in range(4):
        inner = f"<div>{inner}</div>"
    html = f"<html><body><main><h3>Heading</h3><p>{'text ' * 20}</p>{inner}</main></body></html>"
    assert locate_boundary(_anchor(html), listing_id=ID_A, rules=BoundaryRules(max_hops=3)) is None
    assert locate_boundary(_anchor(html), listing_id=ID_A, rules=BoundaryRules(max_hops=10)) is not None


def test_boundaryless_anchor() -> None:
    html = f'<html><body><div><a href="/listings/detail/{ID_A}">x</a></div></body></html>'
    assert locate_boundary(_anchor(html), listing_id=ID_A) is None


def test_walk_stops_at_container_shared_with_neighbour() -> None:
    html = f"""
    <html><body><div>
      <a href="/listings/detail/{ID_A}">First listing</a>
      <a href="/listings/detail/{ID_B}">Second listing</a>
      <span>Both of these units are located in the same business park downtown.</span>
    </div></body></html>
    """
    assert locate_boundary(_anchor(html), listing_id=ID_A) is None
