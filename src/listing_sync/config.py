from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_BASE_URL = os.environ.get("LISTINGS_BASE_URL", "https://greyrockcommercial.appfolio.com")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, str(default)))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)))
    except ValueError:
        return default


@dataclass
class SyncConfig:
    base_url: str = DEFAULT_BASE_URL
    # None means "{base_url}/listings"
    listings_url: Optional[str] = os.environ.get("LISTINGS_URL")
    output_file: str = os.environ.get("LISTINGS_OUTPUT", "docs/listings.json")
    # "detail" fetches one page per listing, "card" reads the index cards only
    mode: str = os.environ.get("LISTINGS_MODE", "detail")
    max_retries: int = _env_int("LISTINGS_MAX_RETRIES", 3)
    retry_delay_secs: float = _env_float("LISTINGS_RETRY_DELAY_SECS", 5.0)
    detail_delay_secs: float = _env_float("LISTINGS_DETAIL_DELAY_SECS", 1.5)
    timeout_secs: float = _env_float("LISTINGS_TIMEOUT_SECS", 30.0)
    max_listings: int = _env_int("LISTINGS_MAX_COUNT", 200)
    suspicious_price: float = 1_000_000
    suspicious_area: float = 1_000_000
    jitter_degrees: float = 0.005
    user_agent: str = os.environ.get("HTTP_USER_AGENT", "ListingSync/2.0 (+https://greyrockcre.com)")

    def __post_init__(self) -> None:
        if not self.listings_url:
            self.listings_url = f"{self.base_url.rstrip('/')}/listings"

    def detail_url(self, listing_id: str) -> str:
        return f"{self.base_url.rstrip('/')}/listings/detail/{listing_id}"

    def action_url(self, listing_id: str) -> str:
        return (
            f"{self.base_url.rstrip('/')}/listings/rental_applications/new"
            f"?listable_uid={listing_id}&source=Website"
        )
