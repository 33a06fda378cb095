from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

import requests

from listing_sync.config import SyncConfig
from listing_sync.errors import NetworkError


log = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, url: str) -> str: ...


class HttpFetcher:
    """GET pages with a fixed header set and linear back-off between retries.

    Raises :class:`NetworkError` once ``max_retries`` attempts have failed.
    """

    def __init__(
        self,
        config: SyncConfig | None = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config or SyncConfig()
        self.session = session or requests.Session()
        self.session.headers.update(self._headers())
        self._sleep = sleep
        self.log = logger or log

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def fetch(self, url: str) -> str:
        retries = max(1, self.config.max_retries)
        last_error = "no attempts made"
        for attempt in range(1, retries + 1):
            self.log.info("Fetching (attempt %d/%d)", attempt, retries, extra={"data": {"url": url}})
            try:
                resp = self.session.get(url, timeout=self.config.timeout_secs)
                resp.raise_for_status()
                html = resp.text
                self.log.info("Fetched %d bytes", len(html), extra={"data": {"url": url}})
                return html
            except requests.RequestException as exc:
                last_error = str(exc)
                self.log.warning("Fetch attempt %d failed: %s", attempt, exc, extra={"data": {"url": url}})
                if attempt < retries:
                    self._sleep(self.config.retry_delay_secs * attempt)
        raise NetworkError(url, last_error)
