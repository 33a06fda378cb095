from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from listing_sync.config import SyncConfig
from listing_sync.errors import SyncError
from listing_sync.repositories import JsonSnapshotStore
from listing_sync.services.pipeline import CARD_MODE, DETAIL_MODE, ListingSync
from listing_sync.services.summary import render_failure, render_summary
from listing_sync.utils.log import configure_logging


log = logging.getLogger("listing_sync")


def _append(path: Optional[str], text: str) -> None:
    if not path:
        return
    try:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        log.warning("Could not write run summary: %s", exc)


def main(argv: Optional[Sequence[str]] = None) -> int:
    defaults = SyncConfig()
    parser = argparse.ArgumentParser(description="Sync commercial listings into a JSON snapshot")
    parser.add_argument("--url", default=defaults.listings_url, help="Listings index URL")
    parser.add_argument("--output", type=Path, default=Path(defaults.output_file), help="Snapshot JSON path")
    parser.add_argument("--mode", choices=[DETAIL_MODE, CARD_MODE], default=defaults.mode)
    parser.add_argument("--log-level", default=os.environ.get("LOG_LEVEL", "INFO"))
    parser.add_argument(
        "--summary",
        default=os.environ.get("GITHUB_STEP_SUMMARY"),
        help="Append a Markdown run summary to this file",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    config = SyncConfig(listings_url=args.url, output_file=str(args.output), mode=args.mode)
    sync = ListingSync(config, store=JsonSnapshotStore(args.output))
    try:
        snapshot = sync.run()
    except SyncError as exc:
        log.error("Scraper failed: %s", exc, extra={"data": {"type": type(exc).__name__}})
        _append(args.summary, render_failure(exc))
        return exc.exit_code

    log.info("Wrote %s", args.output, extra={"data": {"count": snapshot.meta.listing_count}})
    _append(args.summary, render_summary(snapshot))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
