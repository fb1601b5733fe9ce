"""In-memory tour catalog the HTTP host resolves tours from."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from tour_builder.schemas import Tour
from tour_builder.settings import CATALOG_PATH, get_logger

logger = get_logger(__name__)


class TourCatalog:
    """Tours indexed by id and by slug."""

    def __init__(self, tours: Iterable[Tour] = ()) -> None:
        self._tours: Dict[str, Tour] = {}
        self._by_slug: Dict[str, Tour] = {}
        for tour in tours:
            self.add(tour)

    def add(self, tour: Tour) -> None:
        self._tours[tour.id] = tour
        if tour.slug:
            self._by_slug[tour.slug] = tour

    def get(self, identifier: str) -> Tour:
        tour = self._tours.get(identifier) or self._by_slug.get(identifier)
        if tour is None:
            raise KeyError(identifier)
        return tour

    def find(self, identifier: Optional[str]) -> Optional[Tour]:
        if not identifier:
            return None
        try:
            return self.get(identifier)
        except KeyError:
            return None

    def __len__(self) -> int:
        return len(self._tours)

    def __iter__(self):
        return iter(self._tours.values())


def _parse_tours(raw: Any) -> List[Tour]:
    items = raw.get("tours", []) if isinstance(raw, dict) else raw
    tours: List[Tour] = []
    if not isinstance(items, list):
        logger.warning("Catalog data is a %s, expected a list of tours; ignoring it", type(items).__name__)
        return tours
    for item in items:
        try:
            tours.append(Tour.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping catalog entry %r: %s", item.get("id") if isinstance(item, dict) else item, exc.errors())
    return tours


def load_catalog(path: str | Path | None = CATALOG_PATH) -> TourCatalog:
    """Load tours from a JSON list (or ``{"tours": [...]}``); empty when no file is configured."""
    if not path:
        return TourCatalog()
    catalog_path = Path(path)
    if not catalog_path.exists():
        logger.warning("Catalog file %s not found; starting with an empty catalog", catalog_path)
        return TourCatalog()
    raw = json.loads(catalog_path.read_text(encoding="utf-8"))
    catalog = TourCatalog(_parse_tours(raw))
    logger.info("Loaded %d tour(s) from %s", len(catalog), catalog_path)
    return catalog
