from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

from scrapy.logformatter import LogFormatter


class JsonLogFormatter(logging.Formatter):
    """One JSON object per line: ``timestamp``, ``level``, ``msg`` and optional ``data``.

    Structured payloads are attached with ``extra={"data": {...}}``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "msg": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "INFO", stream: Optional[object] = None) -> None:
    handler = logging.StreamHandler(stream)  # type: ignore[arg-type]
    handler.setFormatter(JsonLogFormatter())
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


class NoItemLogFormatter(LogFormatter):
    """Scrapy LogFormatter that omits the full record from 'scraped' logs.

    Descriptions and image galleries make item dumps unreadable; the listing
    id is enough to follow progress.
    """

    def scraped(self, item, response, spider):  # type: ignore[override]
        data = super().scraped(item, response, spider)
        listing_id = getattr(item, "id", None) or (item.get("id") if isinstance(item, dict) else None)
        data["msg"] = "Scraped listing %(id)s from %(src)s"
        data["args"] = {"id": listing_id, "src": response}
        return data
