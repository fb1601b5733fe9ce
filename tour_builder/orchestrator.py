# tour_builder/orchestrator.py
from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from tour_builder.composers.day_resolver import per_day_places, resolve_day_stops
from tour_builder.composers.itinerary_composer import build_merged_itinerary, custom_route_for
from tour_builder.composers.price_composer import per_person, price_for
from tour_builder.composers.segment_selector import normalize_selection, selected_day_count
from tour_builder.composers.span_planner import plan_spans
from tour_builder.schemas import (
    DayEntry,
    JoinAndLeave,
    SegmentSelection,
    SessionView,
    SpliceRequest,
    Stop,
    Tour,
)
from tour_builder.settings import CURRENCY, get_logger

logger = get_logger(__name__)


def build_session_view(
    base: Tour,
    insert: Optional[Tour] = None,
    insert_after_day: Optional[int] = None,
    selection: Optional[SegmentSelection] = None,
    passengers: int = 1,
    infants: int = 0,
    departure: Optional[date] = None,
    currency: str = CURRENCY,
) -> SessionView:
    """Recompute everything the tour-customisation screen draws for one session state.

    Nothing is cached between calls: any change to the splice, the selection
    or the party size means calling this again with the new state. An insert
    without an explicit ``insert_after_day`` is appended after the base
    tour's final day. ``InvalidSpliceDay`` propagates to the caller.
    """
    splice: Optional[SpliceRequest] = None
    if insert is not None:
        after_day = insert_after_day if insert_after_day is not None else base.total_days - 1
        splice = SpliceRequest(insert_tour=insert, insert_after_day=after_day, base_tour=base)

    itinerary = build_merged_itinerary(base, splice)
    day_stops = resolve_day_stops(itinerary)
    places = per_day_places(itinerary)
    layout = plan_spans(itinerary)
    current = normalize_selection(selection, itinerary.total_days)
    day_count = selected_day_count(current, itinerary.total_days)

    join_day = current.join_day if isinstance(current, JoinAndLeave) else 0
    days: List[DayEntry] = []
    for idx in range(itinerary.total_days):
        stop: Optional[Stop] = day_stops[idx] if idx < len(day_stops) else None
        days.append(
            DayEntry(
                index=idx,
                city=stop.city if stop else None,
                country=stop.country if stop else None,
                calendar_date=departure + timedelta(days=idx) if departure else None,
                places=places[idx],
                selected=isinstance(current, JoinAndLeave) and current.join_day <= idx <= current.leave_day,
            )
        )

    start_date = departure + timedelta(days=join_day) if departure else None
    end_date = start_date + timedelta(days=day_count - 1) if start_date and day_count else None
    from_city, to_city = _trip_endpoints(day_stops, current)

    price = price_for(base, insert, passengers=passengers, infants=infants, currency=currency)
    custom_route = custom_route_for(splice, per_person(insert)) if splice is not None else None

    logger.info(
        "Session view for %s%s: %d day(s), %d span(s), %d connector(s), total %s",
        base.id,
        f" + {insert.id} after day {splice.insert_after_day}" if splice is not None and insert is not None else "",
        itinerary.total_days,
        len(layout.spans),
        len(layout.connectors),
        price.formatted_total,
    )

    return SessionView(
        itinerary=itinerary,
        days=days,
        layout=layout,
        selection=current,
        day_count=day_count,
        start_date=start_date,
        end_date=end_date,
        from_city=from_city,
        to_city=to_city,
        price=price,
        custom_route=custom_route,
    )


def _trip_endpoints(day_stops: List[Stop], selection: SegmentSelection) -> tuple:
    if not day_stops:
        return None, None
    if isinstance(selection, JoinAndLeave):
        first = day_stops[min(selection.join_day, len(day_stops) - 1)]
        last = day_stops[min(selection.leave_day, len(day_stops) - 1)]
        return first.city, last.city
    return day_stops[0].city, day_stops[-1].city
