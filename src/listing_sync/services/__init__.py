"""Service layer for the listings sync."""

from .pipeline import ListingSync
from .scraper import ListingSpider

__all__ = ["ListingSync", "ListingSpider"]
