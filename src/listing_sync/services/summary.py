"""Markdown run summaries (e.g. for ``$GITHUB_STEP_SUMMARY``)."""

from __future__ import annotations

from typing import List, Optional

from listing_sync.errors import StructureChanged, SyncError
from listing_sync.models import ListingRecord, RunSnapshot


def _money(value: Optional[float]) -> str:
    return f"${value:,.0f}" if value is not None else "?"


def _listing_section(record: ListingRecord) -> str:
    area = f"{record.area:,}" if record.area else "?"
    return "\n".join(
        [
            f"### {record.title}",
            f"- Address: {record.address or 'No address'}",
            f"- Price: {_money(record.price)}/mo | {area} SF",
            f"- Images: {len(record.images)}",
        ]
    )


def render_summary(snapshot: RunSnapshot) -> str:
    meta = snapshot.meta
    lines: List[str] = [
        "## Scrape Results",
        "| Metric | Value |",
        "| --- | --- |",
        f"| Listings Found | {meta.listing_count} |",
        f"| Total Images | {meta.total_images} |",
        f"| Previous Count | {meta.previous_count if meta.previous_count is not None else 'N/A'} |",
        f"| Changes Detected | {'Yes' if meta.has_changes else 'No'} |",
        f"| Duration | {meta.scrape_duration_ms}ms |",
        f"| Warnings | {len(meta.warnings)} |",
        "",
    ]
    if meta.no_vacancies:
        lines.append("No current vacancies.")
    lines.extend(_listing_section(r) for r in snapshot.listings)
    if meta.warnings:
        lines.append("\n### Warnings")
        lines.extend(f"- {w}" for w in meta.warnings)
    return "\n".join(lines) + "\n"


def render_failure(error: SyncError) -> str:
    lines = ["## Scrape Failed", f"**Error:** {error}", ""]
    if isinstance(error, StructureChanged):
        lines.append("The listings page structure may have changed. Check the scraper logs for details.")
        lines.append("")
    lines.append("> Last successful data is still being served to the website.")
    return "\n".join(lines) + "\n"
