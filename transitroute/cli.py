"""Command line entry point: ``transitroute START GOAL HH:MM:SS [options...]``."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from transitroute.adapters.persistence import CsvNetworkRepository
from transitroute.app.services.routing_service import RoutingService
from transitroute.config import RouterConfig
from transitroute.domain.algorithms.service_time import format_time_of_day
from transitroute.domain.exceptions import NetworkDataError, NoPathFound
from transitroute.domain.models import Route, RouteLeg, TravelMode

logger = logging.getLogger("transitroute")


def _clock(minutes: float | None) -> str:
    return format_time_of_day(minutes) if minutes is not None else "--:--:--"


def format_leg(leg: RouteLeg) -> str:
    origin = leg.origin_name or leg.origin_stop_id
    destination = leg.destination_name or leg.destination_stop_id
    span = (
        f"from {origin} ({_clock(leg.depart_min)}) "
        f"to {destination} ({_clock(leg.arrive_min)})"
    )
    if leg.mode is TravelMode.WALK:
        return f"Walk {span}"

    mode = leg.mode.name if leg.mode is not None else "UNKNOWN"
    line = (leg.line.short_name or leg.line.id) if leg.line is not None else ""
    return " ".join(part for part in ("Take", mode, line, span) if part)


def format_route(route: Route) -> list[str]:
    if not route.legs:
        return [f"Already at {route.origin_name or route.origin_stop_id}."]
    lines = [format_leg(leg) for leg in route.legs]
    lines.append(f"Total travel time: {route.total_duration_min:.0f} min")
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transitroute",
        description="Fastest public-transport route between two named stops.",
    )
    parser.add_argument(
        "--data",
        action="append",
        type=Path,
        metavar="DIR",
        help="Timetable source directory (repeatable; default: NETWORK_DATA_PATHS)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default INFO)")
    parser.add_argument("start", help="Departure stop name")
    parser.add_argument("goal", help="Arrival stop name")
    parser.add_argument("time", help="Departure time HH:MM:SS")
    parser.add_argument(
        "options",
        nargs=argparse.REMAINDER,
        help="-MODE avoids a mode, -NMODE prefers it (e.g. -BUS -NTRAIN)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = RouterConfig.from_env()
    if args.data:
        config = replace(config, data_paths=tuple(args.data))

    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        service = RoutingService.from_repository(
            CsvNetworkRepository(base_paths=config.data_paths), config
        )
        route = service.find_route(
            origin=args.start,
            destination=args.goal,
            depart_at=args.time,
            options=args.options,
        )
    except NoPathFound as exc:
        print(f"No route found: {exc}")
        return 1
    except (NetworkDataError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    for line in format_route(route):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
