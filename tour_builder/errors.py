"""Error types raised by the itinerary composers."""
from __future__ import annotations


class InvalidSpliceDay(ValueError):
    """The requested splice point lies outside the base tour's days."""

    def __init__(self, insert_after_day: int, base_total_days: int) -> None:
        self.insert_after_day = insert_after_day
        self.base_total_days = base_total_days
        super().__init__(
            f"insert_after_day={insert_after_day} is outside [0, {base_total_days - 1}]"
            f" for a {base_total_days}-day base tour"
        )


class MalformedStopList(LookupError):
    """No stop range covers a day. Absorbed by the day resolver, never surfaced."""

    def __init__(self, day: int) -> None:
        self.day = day
        super().__init__(f"no stop range covers day {day}")
