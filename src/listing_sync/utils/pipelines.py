from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class JsonifyRecords:
    """Scrapy pipeline that converts pydantic records to JSON-ready dicts.

    Uses the camelCase aliases so feed exports match the snapshot file.
    """

    def process_item(self, item: Any, spider: Any) -> Any:  # scrapy signature
        if isinstance(item, BaseModel):
            return item.model_dump(mode="json", by_alias=True)
        return item
