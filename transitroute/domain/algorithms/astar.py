from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterable

from transitroute.domain.models import Edge, NetworkDataset, TravelMode

from .geo_utils import kmh_to_m_per_min, planar_distance_m
from .transit_graph import TransitGraph

logger = logging.getLogger(__name__)

# Fastest first; used to pick the heuristic speed of a stop.
MODE_PRIORITY: tuple[TravelMode, ...] = (
    TravelMode.TRAIN,
    TravelMode.METRO,
    TravelMode.BUS,
    TravelMode.TRAM,
)

MODE_SPEED_KMH: dict[TravelMode, float] = {
    TravelMode.TRAIN: 100.0,
    TravelMode.METRO: 72.0,
    TravelMode.BUS: 30.0,
    TravelMode.TRAM: 20.0,
}

MODE_PREFERENCE_WEIGHT = 400.0


@dataclass(frozen=True, slots=True)
class ModePreferences:
    """Per-query mode bias parsed from option tokens.

    ``-BUS`` avoids buses, ``-NBUS`` prefers them. The bias only reorders
    exploration; it never changes the travel time of a path.
    """

    avoid: frozenset[TravelMode] = frozenset()
    prefer: frozenset[TravelMode] = frozenset()
    weight: float = MODE_PREFERENCE_WEIGHT

    @classmethod
    def from_tokens(
        cls, tokens: Iterable[str], *, weight: float = MODE_PREFERENCE_WEIGHT
    ) -> ModePreferences:
        avoid: set[TravelMode] = set()
        prefer: set[TravelMode] = set()
        for raw in tokens:
            token = raw.strip().upper()
            mode = _transit_mode(token[1:]) if token.startswith("-") else None
            if mode is not None:
                avoid.add(mode)
                continue

            mode = _transit_mode(token[2:]) if token.startswith("-N") else None
            if mode is not None:
                prefer.add(mode)
                continue

            logger.warning("Ignoring unknown route option %r", raw)

        return cls(avoid=frozenset(avoid), prefer=frozenset(prefer), weight=weight)

    def adjustment(self, mode: TravelMode | None) -> float:
        if mode is None:
            return 0.0
        if mode in self.avoid:
            return self.weight
        if mode in self.prefer:
            return -self.weight
        return 0.0


def _transit_mode(name: str) -> TravelMode | None:
    try:
        mode = TravelMode[name]
    except KeyError:
        return None
    return None if mode is TravelMode.WALK else mode


def boarding_wait(
    dataset: NetworkDataset, edge: Edge, at_time_min: float
) -> float | None:
    """Minutes to wait at ``edge.from_stop_id`` before traversing ``edge``.

    Returns None when the service has already left. Walking edges, and trips
    with no recorded departure at the stop, board immediately.
    """

    if edge.is_walk or edge.trip_id is None:
        return 0.0

    visit = dataset.visits_by_trip.get(edge.trip_id)
    departure = visit.departure_min(edge.from_stop_id) if visit is not None else None
    if departure is None:
        return 0.0
    if departure < at_time_min:
        return None
    return departure - at_time_min


@dataclass(slots=True)
class _SearchState:
    """Mutable bookkeeping owned by a single ``search`` call."""

    open_heap: list[tuple[float, int, str]] = field(default_factory=list)
    closed: set[str] = field(default_factory=set)
    arrival: dict[str, float] = field(default_factory=dict)
    ranking: dict[str, float] = field(default_factory=dict)
    came_from: dict[str, str] = field(default_factory=dict)
    edge_to: dict[str, Edge] = field(default_factory=dict)
    _counter: itertools.count = field(default_factory=itertools.count)

    def push(self, stop_id: str, rank: float) -> None:
        self.ranking[stop_id] = rank
        heapq.heappush(self.open_heap, (rank, next(self._counter), stop_id))

    def pop(self) -> str | None:
        while self.open_heap:
            rank, _, stop_id = heapq.heappop(self.open_heap)
            # Lazy deletion: skip entries superseded by a later push.
            if stop_id in self.closed or rank != self.ranking.get(stop_id):
                continue
            return stop_id
        return None


@dataclass(frozen=True, slots=True)
class PathFinder:
    """Time-dependent A* over a built ``TransitGraph``.

    Holds only read-only references; every ``search`` call allocates its own
    state, so one instance can serve any number of queries.
    """

    graph: TransitGraph
    dataset: NetworkDataset
    preference_weight: float = MODE_PREFERENCE_WEIGHT

    def search(
        self,
        start_name: str,
        goal_name: str,
        start_time_min: float,
        options: Iterable[str] = (),
    ) -> list[Edge] | None:
        """Return the edges of the best path, ``[]`` if start is the goal, or None."""

        start_id = self.dataset.find_stop_id(start_name)
        goal_id = self.dataset.find_stop_id(goal_name)
        if start_id is None or goal_id is None:
            return None
        return self.search_ids(
            start_id,
            goal_id,
            start_time_min,
            ModePreferences.from_tokens(options, weight=self.preference_weight),
        )

    def search_ids(
        self,
        start_id: str,
        goal_id: str,
        start_time_min: float,
        preferences: ModePreferences | None = None,
    ) -> list[Edge] | None:
        if start_id == goal_id:
            return []

        prefs = preferences or ModePreferences()
        state = _SearchState()
        state.arrival[start_id] = start_time_min
        state.push(start_id, self.heuristic(start_id, goal_id))

        while True:
            current = state.pop()
            if current is None:
                return None
            if current == goal_id:
                return _reconstruct(state, goal_id)

            state.closed.add(current)
            current_time = state.arrival[current]

            for edge in self.graph.edges_from(current):
                neighbor = edge.to_stop_id
                if neighbor in state.closed:
                    continue

                wait = boarding_wait(self.dataset, edge, current_time)
                if wait is None:
                    continue

                tentative = current_time + wait + edge.duration_min
                if tentative >= state.arrival.get(neighbor, float("inf")):
                    continue

                mode = None if edge.is_walk else self.dataset.mode_for_trip(edge.trip_id)
                state.came_from[neighbor] = current
                state.edge_to[neighbor] = edge
                state.arrival[neighbor] = tentative
                state.push(
                    neighbor,
                    tentative + self.heuristic(neighbor, goal_id) + prefs.adjustment(mode),
                )

    def fastest_mode(self, stop_id: str) -> TravelMode | None:
        modes = {
            self.dataset.mode_for_trip(edge.trip_id)
            for edge in self.graph.edges_from(stop_id)
            if not edge.is_walk
        }
        for mode in MODE_PRIORITY:
            if mode in modes:
                return mode
        return None

    def heuristic(self, stop_id: str, goal_id: str) -> float:
        """Estimated minutes to the goal at the fastest speed leaving ``stop_id``."""

        mode = self.fastest_mode(stop_id)
        if mode is None:
            return 0.0

        here = self.dataset.stops_by_id.get(stop_id)
        goal = self.dataset.stops_by_id.get(goal_id)
        if here is None or goal is None:
            return 0.0

        distance_m = planar_distance_m(here.location, goal.location)
        return distance_m / kmh_to_m_per_min(MODE_SPEED_KMH[mode])


def _reconstruct(state: _SearchState, goal_id: str) -> list[Edge] | None:
    path: list[Edge] = []
    current = goal_id
    while current in state.came_from:
        path.append(state.edge_to[current])
        current = state.came_from[current]
    if not path:
        return None
    path.reverse()
    return path
