"""Stop-to-day range allocation."""
from __future__ import annotations

import logging
from typing import List, Literal, Sequence

from tour_builder.schemas import Stop, StopRange, Tour

logger = logging.getLogger(__name__)


def build_stop_ranges(stops: Sequence[Stop], total_days: int, offset: int = 0) -> List[StopRange]:
    """Walk ``stops`` in order and give each a contiguous, inclusive day range.

    Each stop consumes its dwell length (one day when absent or non-positive)
    starting at ``offset``. Days left over once every stop is placed are
    absorbed by the last stop; stops that would start past the final day are
    dropped and an overrunning range is clipped, so the output always
    partitions ``[offset, offset + total_days - 1]`` when any stop fits.
    """
    ranges: List[StopRange] = []
    if total_days <= 0 or not stops:
        if stops and total_days <= 0:
            logger.debug("Tour has %d stop(s) but no days; nothing to allocate", len(stops))
        return ranges

    last_day = offset + total_days - 1
    cursor = 0
    for stop in stops:
        start = offset + cursor
        if start > last_day:
            logger.debug("Dropping stop %s: starts after final day %d", stop.city, last_day)
            break
        end = min(start + stop.days_here - 1, last_day)
        ranges.append(StopRange(stop=stop, start_day=start, end_day=end))
        cursor += stop.days_here

    if cursor < total_days:
        ranges[-1] = ranges[-1].model_copy(update={"end_day": last_day})
    return ranges


def ranges_for_tour(tour: Tour, source: Literal["base", "insert"] = "base", offset: int = 0) -> List[StopRange]:
    """Build a tour's own ranges tagged with its provenance."""
    return [
        r.model_copy(update={"origin_tour_id": tour.id, "source": source, "color_key": tour.color_key})
        for r in build_stop_ranges(tour.stops, tour.total_days, offset=offset)
    ]
