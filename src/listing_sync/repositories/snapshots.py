from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from listing_sync.models import RunSnapshot


log = logging.getLogger(__name__)


class JsonSnapshotStore:
    """Keeps the last good :class:`RunSnapshot` as a JSON file."""

    def __init__(self, path: str | Path, logger: Optional[logging.Logger] = None) -> None:
        self.path = Path(path)
        self.log = logger or log

    def load(self) -> Optional[RunSnapshot]:
        if not self.path.exists():
            return None
        try:
            return RunSnapshot.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            self.log.warning("Could not read previous snapshot: %s", exc, extra={"data": {"file": str(self.path)}})
            return None

    def save(self, snapshot: RunSnapshot) -> None:
        """Write atomically so a crash never leaves a half-written file behind."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(snapshot.to_json())
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
