"""Join/leave day selection over the merged itinerary.

The selection is either empty or a closed ``[join_day, leave_day]`` range.
A click moves whichever boundary the clicked day lies beyond; a click inside
the current range starts a fresh single-day selection there.
"""
from __future__ import annotations

import logging
from typing import Optional

from tour_builder.schemas import EmptySelection, JoinAndLeave, SegmentSelection

logger = logging.getLogger(__name__)


def reset() -> EmptySelection:
    return EmptySelection()


def _clamp_day(day: int, total_days: Optional[int]) -> int:
    upper = (total_days - 1) if total_days is not None else None
    clamped = max(0, day)
    if upper is not None:
        clamped = min(clamped, upper)
    if clamped != day:
        logger.debug("Clamped selected day %d to %d", day, clamped)
    return clamped


def select_day(selection: SegmentSelection, day: int, total_days: Optional[int] = None) -> SegmentSelection:
    """Apply one day click and return the next selection.

    With ``total_days`` given, both the incoming selection and the clicked day
    are clamped into the itinerary first; a zero-day itinerary has nothing to select.
    """
    if total_days is not None:
        if total_days <= 0:
            return EmptySelection()
        selection = normalize_selection(selection, total_days)
    day = _clamp_day(day, total_days)
    if isinstance(selection, EmptySelection):
        return JoinAndLeave(join_day=day, leave_day=day)
    if day < selection.join_day:
        return JoinAndLeave(join_day=day, leave_day=selection.leave_day)
    if day > selection.leave_day:
        return JoinAndLeave(join_day=selection.join_day, leave_day=day)
    return JoinAndLeave(join_day=day, leave_day=day)


def normalize_selection(selection: Optional[SegmentSelection], total_days: int) -> SegmentSelection:
    """Clamp a selection into ``[0, total_days - 1]``; empty when there are no days."""
    if selection is None or isinstance(selection, EmptySelection) or total_days <= 0:
        return EmptySelection()
    last = total_days - 1
    join_day = min(selection.join_day, last)
    leave_day = min(selection.leave_day, last)
    if (join_day, leave_day) != (selection.join_day, selection.leave_day):
        logger.debug(
            "Selection %d..%d clamped to %d..%d for %d day(s)",
            selection.join_day,
            selection.leave_day,
            join_day,
            leave_day,
            total_days,
        )
    return JoinAndLeave(join_day=join_day, leave_day=leave_day)


def selected_day_count(selection: Optional[SegmentSelection], total_days: int) -> int:
    """Days covered by the selection, or the whole itinerary when nothing is selected."""
    if isinstance(selection, JoinAndLeave):
        return selection.leave_day - selection.join_day + 1
    return total_days
