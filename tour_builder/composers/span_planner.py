"""Group a merged itinerary into alternating-lane spans."""
from __future__ import annotations

from typing import List

from tour_builder.schemas import Connector, MergedItinerary, Span, SpanLayout


def plan_spans(itinerary: MergedItinerary) -> SpanLayout:
    """Collapse contiguous runs of ranges from the same tour into spans.

    Lanes alternate by span position, never by origin, so neighbouring spans
    always sit in different lanes. A connector marks each boundary where the
    origin tour changes. Day ranges only; mapping lanes and days to screen
    coordinates is left to the caller.
    """
    spans: List[Span] = []
    for r in sorted(itinerary.ranges, key=lambda rng: rng.start_day):
        last = spans[-1] if spans else None
        if last is not None and last.origin_tour_id == r.origin_tour_id and r.start_day <= last.end_day + 1:
            last.end_day = max(last.end_day, r.end_day)
            continue
        spans.append(
            Span(
                start_day=r.start_day,
                end_day=r.end_day,
                origin_tour_id=r.origin_tour_id,
                color_key=r.color_key,
                lane=len(spans) % 2,
            )
        )

    connectors = [
        Connector(after_span_index=idx, from_lane=a.lane, to_lane=b.lane)
        for idx, (a, b) in enumerate(zip(spans, spans[1:]))
        if a.origin_tour_id != b.origin_tour_id
    ]
    return SpanLayout(spans=spans, connectors=connectors)
