"""Extraction pipeline: index parsing, boundary location and field extraction."""

from .boundary import BoundaryRules, locate_boundary
from .index import IndexResult, ListingAnchor, parse_index
from .records import annualized_rate, build_record, parse_card, parse_detail_page
from .scope import CARD_PROFILE, DETAIL_PROFILE, Scope, ScopeProfile, Strategy, first_match

__all__ = [
    "BoundaryRules",
    "CARD_PROFILE",
    "DETAIL_PROFILE",
    "IndexResult",
    "ListingAnchor",
    "Scope",
    "ScopeProfile",
    "Strategy",
    "annualized_rate",
    "build_record",
    "first_match",
    "locate_boundary",
    "parse_card",
    "parse_detail_page",
    "parse_index",
]
