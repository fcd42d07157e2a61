from __future__ import annotations

from itertools import groupby
from typing import Sequence

from transitroute.domain.algorithms.astar import boarding_wait
from transitroute.domain.models import (
    WALK,
    Edge,
    NetworkDataset,
    Route,
    RouteLeg,
    TravelMode,
)


def replay_arrivals(
    dataset: NetworkDataset, edges: Sequence[Edge], *, start_time_min: float
) -> list[tuple[float, float]]:
    """Return ``(depart, arrive)`` minutes for every edge of a path.

    Uses the same boarding rule as the search, so waits are included.
    """

    t = start_time_min
    out: list[tuple[float, float]] = []
    for edge in edges:
        wait = boarding_wait(dataset, edge, t)
        if wait is None:
            raise ValueError(
                f"Trip {edge.trip_id} has already left {edge.from_stop_id} at {t:.2f}"
            )
        depart = t + wait
        t = depart + edge.duration_min
        out.append((depart, t))
    return out


def _leg_key(edge: Edge) -> str | None:
    if edge.is_walk:
        return WALK
    return edge.line_id if edge.line_id is not None else edge.trip_id


def _stop_name(dataset: NetworkDataset, stop_id: str) -> str | None:
    stop = dataset.stops_by_id.get(stop_id)
    return stop.name if stop is not None else None


def build_route(
    dataset: NetworkDataset,
    edges: Sequence[Edge],
    *,
    start_time_min: float,
    origin_stop_id: str,
    destination_stop_id: str,
) -> Route:
    """Group a searched edge path into legs for display.

    Contiguous walking edges form one walk leg; contiguous edges of the same
    line form one transit leg.
    """

    times = replay_arrivals(dataset, edges, start_time_min=start_time_min)
    timed = list(zip(edges, times))

    legs: list[RouteLeg] = []
    for _, group in groupby(timed, key=lambda item: _leg_key(item[0])):
        chunk = list(group)
        first_edge, (depart, _) = chunk[0]
        last_edge, (_, arrive) = chunk[-1]

        if first_edge.is_walk:
            mode: TravelMode | None = TravelMode.WALK
            line = None
        else:
            line = dataset.line_for_trip(first_edge.trip_id)
            mode = line.mode if line is not None else None

        legs.append(
            RouteLeg(
                mode=mode,
                origin_stop_id=first_edge.from_stop_id,
                destination_stop_id=last_edge.to_stop_id,
                origin_name=_stop_name(dataset, first_edge.from_stop_id),
                destination_name=_stop_name(dataset, last_edge.to_stop_id),
                depart_min=depart,
                arrive_min=arrive,
                line=line,
                trip_id=first_edge.trip_id,
                edges=tuple(e for e, _ in chunk),
            )
        )

    return Route(
        origin_stop_id=origin_stop_id,
        destination_stop_id=destination_stop_id,
        depart_min=start_time_min,
        legs=tuple(legs),
        origin_name=_stop_name(dataset, origin_stop_id),
        destination_name=_stop_name(dataset, destination_stop_id),
    )
