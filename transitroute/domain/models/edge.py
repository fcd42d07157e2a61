from __future__ import annotations

from dataclasses import dataclass

WALK = "WALK"


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed arc of the transit graph.

    Transit edges carry the line id and trip id of the run that serves them.
    Walking edges carry the ``WALK`` marker instead of a line id and no trip.
    Durations are minutes.
    """

    from_stop_id: str
    to_stop_id: str
    line_id: str | None
    duration_min: float
    trip_id: str | None = None

    def __post_init__(self) -> None:
        if self.duration_min < 0:
            raise ValueError(f"Negative edge duration: {self.duration_min}")
        if self.line_id == WALK and self.trip_id is not None:
            raise ValueError("Walking edges cannot reference a trip")

    @property
    def is_walk(self) -> bool:
        return self.line_id == WALK

    @classmethod
    def walk(cls, from_stop_id: str, to_stop_id: str, duration_min: float) -> Edge:
        return cls(
            from_stop_id=from_stop_id,
            to_stop_id=to_stop_id,
            line_id=WALK,
            duration_min=duration_min,
        )
