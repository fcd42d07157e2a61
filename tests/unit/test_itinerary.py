from __future__ import annotations

import pytest

from transitroute.app.services.itinerary import build_route, replay_arrivals
from transitroute.domain.models import (
    Edge,
    GeoPoint,
    Line,
    NetworkDataset,
    ScheduledVisit,
    Stop,
    TravelMode,
    VisitEntry,
)


def _dataset() -> NetworkDataset:
    names = {"W0": "Home", "W1": "Corner", "W2": "Bourse", "X": "Louise", "Y": "Midi", "Z": "Forest"}
    stops = {
        sid: Stop(id=sid, name=name, location=GeoPoint(lat=0.1 * i, lon=0.0))
        for i, (sid, name) in enumerate(names.items())
    }
    visits = {
        "t1": ScheduledVisit(
            trip_id="t1",
            entries=(
                VisitEntry(1, "W2", "08:20:00"),
                VisitEntry(2, "X", "08:30:00"),
                VisitEntry(3, "Y", "08:40:00"),
            ),
        ),
        "t2": ScheduledVisit(
            trip_id="t2",
            entries=(VisitEntry(1, "Y", "08:50:00"), VisitEntry(2, "Z", "09:00:00")),
        ),
    }
    return NetworkDataset(
        stops_by_id=stops,
        lines_by_id={
            "L1": Line(id="L1", mode=TravelMode.TRAM, short_name="81"),
            "L2": Line(id="L2", mode=TravelMode.BUS, short_name="50"),
        },
        line_id_by_trip={"t1": "L1", "t2": "L2"},
        visits_by_trip=visits,
    )


PATH = [
    Edge.walk("W0", "W1", 3.0),
    Edge.walk("W1", "W2", 4.0),
    Edge(from_stop_id="W2", to_stop_id="X", line_id="L1", duration_min=10.0, trip_id="t1"),
    Edge(from_stop_id="X", to_stop_id="Y", line_id="L1", duration_min=10.0, trip_id="t1"),
    Edge(from_stop_id="Y", to_stop_id="Z", line_id="L2", duration_min=10.0, trip_id="t2"),
]


def test_build_route_groups_contiguous_segments() -> None:
    route = build_route(
        _dataset(), PATH, start_time_min=480.0, origin_stop_id="W0", destination_stop_id="Z"
    )

    assert [leg.mode for leg in route.legs] == [
        TravelMode.WALK,
        TravelMode.TRAM,
        TravelMode.BUS,
    ]

    walk, tram, bus = route.legs
    assert (walk.origin_name, walk.destination_name) == ("Home", "Bourse")
    assert (walk.depart_min, walk.arrive_min) == (480.0, 487.0)
    assert walk.line is None and walk.trip_id is None
    assert walk.stop_ids == ("W0", "W1", "W2")

    assert tram.line is not None and tram.line.short_name == "81"
    assert (tram.depart_min, tram.arrive_min) == (500.0, 520.0)
    assert tram.stop_ids == ("W2", "X", "Y")
    assert tram.trip_id == "t1"

    assert (bus.depart_min, bus.arrive_min) == (530.0, 540.0)

    assert route.origin_name == "Home"
    assert route.destination_name == "Forest"
    assert route.arrive_min == 540.0
    assert route.total_duration_min == 60.0
    assert route.edges == tuple(PATH)


def test_empty_path_gives_route_without_legs() -> None:
    route = build_route(
        _dataset(), [], start_time_min=480.0, origin_stop_id="X", destination_stop_id="X"
    )

    assert route.legs == ()
    assert route.arrive_min == 480.0
    assert route.total_duration_min == 0.0


def test_replay_rejects_an_infeasible_path() -> None:
    with pytest.raises(ValueError):
        replay_arrivals(_dataset(), PATH[2:], start_time_min=501.0)


def test_replay_includes_waits() -> None:
    times = replay_arrivals(_dataset(), PATH[2:], start_time_min=490.0)
    assert times == [(500.0, 510.0), (510.0, 520.0), (530.0, 540.0)]
