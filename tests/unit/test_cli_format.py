from __future__ import annotations

from transitroute.cli import build_parser, format_leg, format_route
from transitroute.domain.models import Line, Route, RouteLeg, TravelMode


def test_format_transit_and_walk_legs() -> None:
    ride = RouteLeg(
        mode=TravelMode.TRAIN,
        origin_stop_id="N1",
        destination_stop_id="N2",
        origin_name="Bruxelles-Central",
        destination_name="Liège-Guillemins",
        depart_min=510.0,
        arrive_min=570.0,
        line=Line(id="SNCB-IC", mode=TravelMode.TRAIN, short_name="IC"),
    )
    walk = RouteLeg(
        mode=TravelMode.WALK,
        origin_stop_id="S2",
        destination_stop_id="N1",
        depart_min=492.0,
        arrive_min=499.5,
    )

    assert format_leg(ride) == (
        "Take TRAIN IC from Bruxelles-Central (08:30:00) to Liège-Guillemins (09:30:00)"
    )
    assert format_leg(walk) == "Walk from S2 (08:12:00) to N1 (08:19:30)"


def test_format_leg_without_line_metadata() -> None:
    leg = RouteLeg(mode=None, origin_stop_id="A", destination_stop_id="B")
    assert format_leg(leg) == "Take UNKNOWN from A (--:--:--) to B (--:--:--)"


def test_format_route_for_trivial_route() -> None:
    route = Route(origin_stop_id="A", destination_stop_id="A", depart_min=480.0, origin_name="Delta")
    assert format_route(route) == ["Already at Delta."]


def test_parser_keeps_mode_options_after_positionals() -> None:
    args = build_parser().parse_args(["--data", "x", "A", "B", "08:00:00", "-BUS", "-NTRAIN"])

    assert args.start == "A"
    assert args.goal == "B"
    assert args.time == "08:00:00"
    assert args.options == ["-BUS", "-NTRAIN"]
