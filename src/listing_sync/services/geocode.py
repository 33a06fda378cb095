"""Offline city lookup for map pins."""

from __future__ import annotations

import random
from typing import Dict, Mapping, Optional, Tuple

from listing_sync.models import Coordinates, ListingRecord


NC_METRO_COORDS: Dict[str, Tuple[float, float]] = {
    "charlotte": (35.2271, -80.8431),
    "concord": (35.4088, -80.5795),
    "gastonia": (35.2621, -81.1873),
    "huntersville": (35.4107, -80.8429),
    "mooresville": (35.5849, -80.8101),
    "cornelius": (35.4868, -80.8601),
    "davidson": (35.4993, -80.8487),
    "matthews": (35.1168, -80.7237),
    "mint hill": (35.1796, -80.6468),
    "pineville": (35.0832, -80.8923),
    "indian trail": (35.0760, -80.6593),
    "harrisburg": (35.3264, -80.6555),
    "kannapolis": (35.4874, -80.6217),
    "rock hill": (34.9249, -81.0251),
    "fort mill": (35.0074, -80.9451),
    "columbia": (34.0007, -81.0348),
    "rockwell": (35.5513, -80.4024),
    "salisbury": (35.6710, -80.4742),
    "china grove": (35.5699, -80.5818),
    "landis": (35.5463, -80.6107),
}
DEFAULT_COORDS: Tuple[float, float] = (35.32, -80.85)


class CityGeocoder:
    """Static city table plus per-pin jitter so co-located listings don't overlap.

    The jitter is cosmetic; nothing downstream compares coordinates.
    """

    def __init__(
        self,
        table: Optional[Mapping[str, Tuple[float, float]]] = None,
        default: Tuple[float, float] = DEFAULT_COORDS,
        jitter: float = 0.005,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.table = {k.strip().lower(): v for k, v in (table or NC_METRO_COORDS).items()}
        self.default = default
        self.jitter = jitter
        self._rng = rng or random.Random()

    def lookup(self, city: Optional[str]) -> Coordinates:
        key = (city or "").strip().lower()
        lat, lng = self.table.get(key, self.default)
        return Coordinates(lat=lat, lng=lng)

    def locate(self, city: Optional[str]) -> Coordinates:
        base = self.lookup(city)
        return Coordinates(
            lat=round(base.lat + self._rng.uniform(-self.jitter, self.jitter), 6),
            lng=round(base.lng + self._rng.uniform(-self.jitter, self.jitter), 6),
        )

    def enrich(self, record: ListingRecord) -> ListingRecord:
        return record.model_copy(update={"coordinates": self.locate(record.city)})
