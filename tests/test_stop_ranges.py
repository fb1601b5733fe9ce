from tour_builder.composers.stop_ranges import build_stop_ranges, ranges_for_tour
from tour_builder.schemas import Stop, Tour


def _stops(*entries):
    return [Stop(city=city, dwell_days=days) for city, days in entries]


def _spans(ranges):
    return [(r.stop.city, r.start_day, r.end_day) for r in ranges]


def _covered_days(ranges):
    days = []
    for r in ranges:
        days.extend(range(r.start_day, r.end_day + 1))
    return days


def test_dwell_days_are_consumed_in_order():
    ranges = build_stop_ranges(_stops(("A", 2), ("B", 3), ("C", 2)), 7)
    assert _spans(ranges) == [("A", 0, 1), ("B", 2, 4), ("C", 5, 6)]


def test_missing_or_non_positive_dwell_counts_as_one_day():
    stops = [Stop(city="A"), Stop(city="B", dwell_days=0), Stop(city="C", dwell_days=-4)]
    ranges = build_stop_ranges(stops, 3)
    assert _spans(ranges) == [("A", 0, 0), ("B", 1, 1), ("C", 2, 2)]


def test_leftover_days_extend_the_last_stop():
    ranges = build_stop_ranges(_stops(("A", 1), ("B", 1)), 5)
    assert _spans(ranges) == [("A", 0, 0), ("B", 1, 4)]


def test_overlong_stop_list_is_clipped_to_the_tour_length():
    ranges = build_stop_ranges(_stops(("A", 2), ("B", 3), ("C", 2)), 4)
    assert _spans(ranges) == [("A", 0, 1), ("B", 2, 3)]


def test_offset_shifts_every_range():
    ranges = build_stop_ranges(_stops(("X", 1), ("Y", 1)), 2, offset=3)
    assert _spans(ranges) == [("X", 3, 3), ("Y", 4, 4)]


def test_no_stops_or_no_days_gives_nothing():
    assert build_stop_ranges([], 5) == []
    assert build_stop_ranges(_stops(("A", 2)), 0) == []


def test_ranges_partition_every_day_exactly_once():
    for dwell, total in [((2, 3, 2), 7), ((1, 1, 1), 10), ((4, 4), 3), ((1,), 1)]:
        stops = _stops(*[(f"S{i}", d) for i, d in enumerate(dwell)])
        assert _covered_days(build_stop_ranges(stops, total)) == list(range(total))


def test_ranges_for_tour_tags_provenance():
    tour = Tour(id="red", line="RED", stops=_stops(("A", 1)), total_days=1)
    (rng,) = ranges_for_tour(tour, "insert")
    assert rng.origin_tour_id == "red"
    assert rng.source == "insert"
    assert rng.color_key == "RED"
