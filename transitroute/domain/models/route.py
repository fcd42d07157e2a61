from __future__ import annotations

from dataclasses import dataclass, field

from .edge import Edge
from .network import Line, TravelMode


@dataclass(frozen=True, slots=True)
class RouteLeg:
    """Contiguous run of edges on one line, or one stretch of walking.

    Times are minutes since service-day midnight (may exceed 24h).
    """

    mode: TravelMode | None
    origin_stop_id: str
    destination_stop_id: str
    origin_name: str | None = None
    destination_name: str | None = None
    depart_min: float | None = None
    arrive_min: float | None = None
    line: Line | None = None
    trip_id: str | None = None
    edges: tuple[Edge, ...] = ()

    @property
    def duration_min(self) -> float:
        if self.depart_min is not None and self.arrive_min is not None:
            return max(0.0, self.arrive_min - self.depart_min)
        return float(sum(e.duration_min for e in self.edges))

    @property
    def stop_ids(self) -> tuple[str, ...]:
        if not self.edges:
            return (self.origin_stop_id, self.destination_stop_id)
        return (self.edges[0].from_stop_id, *(e.to_stop_id for e in self.edges))


@dataclass(frozen=True, slots=True)
class Route:
    origin_stop_id: str
    destination_stop_id: str
    depart_min: float
    legs: tuple[RouteLeg, ...] = field(default_factory=tuple)
    origin_name: str | None = None
    destination_name: str | None = None

    @property
    def edges(self) -> tuple[Edge, ...]:
        return tuple(e for leg in self.legs for e in leg.edges)

    @property
    def arrive_min(self) -> float:
        last = next(
            (leg.arrive_min for leg in reversed(self.legs) if leg.arrive_min is not None),
            None,
        )
        return self.depart_min if last is None else last

    @property
    def total_duration_min(self) -> float:
        # Preferred: wall-clock from the query time, which includes waiting.
        if self.legs and self.legs[-1].arrive_min is not None:
            return float(max(0.0, self.legs[-1].arrive_min - self.depart_min))

        # Fallback: sum of leg durations (does not include waiting).
        return float(sum(leg.duration_min for leg in self.legs))
