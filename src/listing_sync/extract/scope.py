"""Extraction scopes and ordered first-match strategy lists.

A :class:`Scope` wraps an immutable parsed-tree snapshot (a ``scrapy.Selector``)
for either one listing card or one full detail page. Field extractors are
pure functions of a scope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, FrozenSet, Generic, Iterable, Optional, Tuple, TypeVar

from scrapy import Selector


log = logging.getLogger(__name__)

T = TypeVar("T")

CARD = "card"
DETAIL = "detail"

# Text nodes that never render
_VISIBLE_TEXT_XPATH = (
    ".//text()[not(ancestor::script) and not(ancestor::style) and not(ancestor::noscript)]"
)


@dataclass(frozen=True)
class ScopeProfile:
    """Markers that differ between a listing card and a detail page."""

    name: str
    description_selectors: Tuple[str, ...]
    gallery_selectors: Tuple[str, ...]
    full_page: bool = False


CARD_PROFILE = ScopeProfile(
    name=CARD,
    description_selectors=(
        ".js-listing-description",
        ".listing-item__description",
        "[class*='description']",
    ),
    gallery_selectors=(
        "img.listing-item__image",
        ".listing-item__figure img",
    ),
)

DETAIL_PROFILE = ScopeProfile(
    name=DETAIL,
    description_selectors=(
        ".listing-detail__description",
        "[class*='listing-detail__description']",
        ".js-listing-description",
    ),
    gallery_selectors=(
        ".gallery img",
        ".swipebox img",
        "img[class*='gallery']",
    ),
    full_page=True,
)


def normalize_space(value: Optional[str]) -> str:
    return " ".join((value or "").split())


def node_text(sel: Selector) -> str:
    """Whitespace-normalised visible text of a single element."""
    return normalize_space(" ".join(sel.xpath(_VISIBLE_TEXT_XPATH).getall()))


@dataclass(frozen=True)
class Scope:
    sel: Selector
    profile: ScopeProfile = CARD_PROFILE
    listing_id: str = ""
    anchor_text: Optional[str] = None
    base_url: Optional[str] = None

    @cached_property
    def body(self) -> Selector:
        if self.profile.full_page:
            found = self.sel.xpath("//body")
            if found:
                return found[0]
        return self.sel

    @cached_property
    def text(self) -> str:
        """Visible text with one line per text node."""
        parts = (t.strip() for t in self.body.xpath(_VISIBLE_TEXT_XPATH).getall())
        return "\n".join(p for p in parts if p)

    @cached_property
    def flat_text(self) -> str:
        return normalize_space(self.text)


@dataclass(frozen=True)
class Strategy(Generic[T]):
    """A named extraction attempt; ``profiles`` limits it to some scope shapes."""

    name: str
    func: Callable[[Scope], Optional[T]]
    profiles: Optional[FrozenSet[str]] = None

    def applies_to(self, scope: Scope) -> bool:
        return self.profiles is None or scope.profile.name in self.profiles


def first_match(strategies: Iterable[Strategy[T]], scope: Scope) -> Optional[T]:
    """Return the first non-empty value produced by ``strategies`` in order.

    A strategy that raises is treated as a miss; extraction never fails.
    """
    for strategy in strategies:
        if not strategy.applies_to(scope):
            continue
        try:
            value = strategy.func(scope)
        except Exception:
            log.debug("Strategy %s raised for listing %s", strategy.name, scope.listing_id, exc_info=True)
            continue
        if value is None or value == "" or value == []:
            continue
        return value
    return None
