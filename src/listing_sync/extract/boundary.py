"""Locate the container that holds exactly one listing card."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from scrapy import Selector

from .index import DETAIL_LINK_RE, listing_id_from_href
from .scope import normalize_space


@dataclass(frozen=True)
class BoundaryRules:
    marker_classes: Tuple[str, ...] = ("listing-item", "js-listing-item")
    class_substring: str = "listing"
    max_hops: int = 10
    min_children: int = 3
    min_links: int = 2
    min_text: int = 50
    link_pattern: "re.Pattern[str]" = DETAIL_LINK_RE


DEFAULT_RULES = BoundaryRules()


def _first(found) -> Optional[Selector]:
    return found[0] if found else None


def _by_marker_class(anchor: Selector, rules: BoundaryRules) -> Optional[Selector]:
    tests = " or ".join(
        f"contains(concat(' ', normalize-space(@class), ' '), ' {cls} ')" for cls in rules.marker_classes
    )
    return _first(anchor.xpath(f"ancestor::*[{tests}][1]"))


def _by_class_substring(anchor: Selector, rules: BoundaryRules) -> Optional[Selector]:
    return _first(anchor.xpath(f"ancestor::*[contains(@class, '{rules.class_substring}')][1]"))


def _by_list_item(anchor: Selector, rules: BoundaryRules) -> Optional[Selector]:
    return _first(anchor.xpath("ancestor::li[1]"))


def _looks_like_card(node: Selector, rules: BoundaryRules) -> bool:
    return (
        len(node.xpath("./*")) >= rules.min_children
        and len(node.xpath(".//a")) >= rules.min_links
        and len(normalize_space(node.xpath("string()").get())) > rules.min_text
    )


def _by_upward_walk(anchor: Selector, rules: BoundaryRules) -> Optional[Selector]:
    node = anchor
    for _ in range(rules.max_hops):
        parent = _first(node.xpath(".."))
        if parent is None:
            return None
        node = parent
        if _looks_like_card(node, rules):
            return node
    return None


BOUNDARY_STRATEGIES: Tuple[Tuple[str, Callable[[Selector, BoundaryRules], Optional[Selector]]], ...] = (
    ("marker_class", _by_marker_class),
    ("listing_class", _by_class_substring),
    ("list_item", _by_list_item),
    ("upward_walk", _by_upward_walk),
)


def _is_exclusive(container: Selector, listing_id: Optional[str], rules: BoundaryRules) -> bool:
    """True when the container links to no listing other than ``listing_id``."""
    if not listing_id:
        return True
    for href in container.xpath(".//a/@href").getall():
        other = listing_id_from_href(href, rules.link_pattern)
        if other and other != listing_id:
            return False
    return True


def locate_boundary(
    anchor: Selector,
    listing_id: Optional[str] = None,
    rules: BoundaryRules = DEFAULT_RULES,
) -> Optional[Selector]:
    """Smallest ancestor of ``anchor`` holding one listing's content, or ``None``.

    Candidates that also contain a neighbouring listing's detail link are
    rejected and the next strategy is tried.
    """
    for _name, strategy in BOUNDARY_STRATEGIES:
        candidate = strategy(anchor, rules)
        if candidate is not None and _is_exclusive(candidate, listing_id, rules):
            return candidate
    return None
