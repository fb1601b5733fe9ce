"""Per-day lookups over a merged itinerary."""
from __future__ import annotations

import logging
from typing import List, Optional

from tour_builder.errors import MalformedStopList
from tour_builder.schemas import MergedItinerary, PlaceEntry, Stop

logger = logging.getLogger(__name__)


def _covering_stop(itinerary: MergedItinerary, day: int) -> Stop:
    for r in itinerary.ranges:
        if r.covers(day):
            return r.stop
    raise MalformedStopList(day)


def resolve_day_stops(itinerary: MergedItinerary) -> List[Stop]:
    """Map every day of ``itinerary`` to the stop whose range covers it.

    A day no range covers borrows the previous day's stop, or the first stop
    that resolves anywhere when nothing precedes it. Returns an empty list
    only when no day resolves at all.
    """
    resolved: List[Optional[Stop]] = []
    gaps: List[int] = []
    for day in range(itinerary.total_days):
        try:
            resolved.append(_covering_stop(itinerary, day))
        except MalformedStopList as exc:
            gaps.append(exc.day)
            resolved.append(None)

    if not gaps:
        return [s for s in resolved if s is not None]

    first = next((s for s in resolved if s is not None), None)
    if first is None:
        logger.warning("No stop covers any of %d day(s); leaving itinerary unresolved", itinerary.total_days)
        return []

    logger.warning("Filled %d uncovered day(s) from neighbouring stops: %s", len(gaps), gaps)
    filled: List[Stop] = []
    for day, stop in enumerate(resolved):
        if stop is None:
            stop = filled[day - 1] if day > 0 else first
        filled.append(stop)
    return filled


def per_day_places(itinerary: MergedItinerary) -> List[List[PlaceEntry]]:
    """List the distinct (city, origin) places whose ranges cover each day."""
    result: List[List[PlaceEntry]] = [[] for _ in range(itinerary.total_days)]
    for day in range(itinerary.total_days):
        for r in itinerary.ranges:
            if not r.covers(day) or not r.stop.city:
                continue
            entry = PlaceEntry(city=r.stop.city, color_key=r.color_key, source=r.source)
            if not any(p.city == entry.city and p.source == entry.source for p in result[day]):
                result[day].append(entry)
    return result
