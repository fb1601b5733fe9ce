"""Splice one tour's stops into another at a chosen day."""
from __future__ import annotations

import logging
from typing import List, Optional

from tour_builder.composers.stop_ranges import ranges_for_tour
from tour_builder.errors import InvalidSpliceDay
from tour_builder.schemas import CustomRoute, MergedItinerary, SpliceRequest, StopRange, Tour

logger = logging.getLogger(__name__)


def build_merged_itinerary(base: Tour, splice: Optional[SpliceRequest] = None) -> MergedItinerary:
    """Return the day-by-day itinerary of ``base`` with ``splice`` applied.

    Without a splice the base tour's ranges are passed through. With one, the
    inserted tour occupies the days right after ``insert_after_day`` and every
    later base day moves back by the inserted tour's length. A base range that
    straddles the splice point is split in two, except for the base tour's
    final range: that stop is never cut short, the insert starts on the day
    the stop began and the whole stop follows the insert.

    Raises ``InvalidSpliceDay`` when the splice point is not a base day.
    """
    base_ranges = ranges_for_tour(base, "base")
    if splice is None:
        return MergedItinerary(ranges=base_ranges, total_days=base.total_days)

    after_day = splice.insert_after_day
    if not 0 <= after_day < base.total_days:
        raise InvalidSpliceDay(after_day, base.total_days)

    insert = splice.insert_tour
    insert_len = insert.total_days
    insert_start = after_day + 1

    before: List[StopRange] = []
    after: List[StopRange] = []
    last_index = len(base_ranges) - 1
    for idx, r in enumerate(base_ranges):
        if r.start_day > after_day:
            after.append(r.shifted(insert_len))
        elif idx == last_index:
            # final stop is never cut, even when it ends exactly on the splice day;
            # the insert takes its place and the whole stop follows it
            insert_start = r.start_day
            after.append(r.shifted(insert_len))
        elif r.end_day <= after_day:
            before.append(r)
        else:
            before.append(r.model_copy(update={"end_day": after_day}))
            after.append(r.model_copy(update={"start_day": after_day + 1}).shifted(insert_len))

    insert_ranges = ranges_for_tour(insert, "insert", offset=insert_start)
    merged = before + insert_ranges + after
    total_days = base.total_days + insert_len
    logger.debug(
        "Spliced %s (%d day(s)) into %s after day %d: %d range(s), %d day(s)",
        insert.id,
        insert_len,
        base.id,
        after_day,
        len(merged),
        total_days,
    )
    return MergedItinerary(ranges=merged, total_days=total_days)


def custom_route_for(splice: SpliceRequest, per_person_price: float) -> CustomRoute:
    """Describe a splice the way the booking layer stores it."""
    insert = splice.insert_tour
    return CustomRoute(
        tour_slug=insert.slug,
        tour_title=insert.title,
        tour_line=insert.line,
        duration_days=insert.total_days,
        price_per_person=per_person_price,
        insert_after_day=splice.insert_after_day,
    )
