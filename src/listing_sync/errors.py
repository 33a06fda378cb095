from __future__ import annotations

from typing import List, Optional


class SyncError(Exception):
    """Base class for failures that reject a whole run."""

    exit_code = 1


class NetworkError(SyncError):
    """The fetcher gave up after exhausting its retries."""

    exit_code = 1

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class StructureChanged(SyncError):
    """Index page has neither detail links nor a recognised empty-inventory notice."""

    exit_code = 2


class NoListingsExtracted(SyncError):
    exit_code = 2


class ValidationFailed(SyncError):
    exit_code = 3

    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None) -> None:
        super().__init__("Validation failed: " + "; ".join(errors))
        self.errors = list(errors)
        self.warnings = list(warnings or [])
