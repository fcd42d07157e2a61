from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Iterator

import networkx as nx

from transitroute.domain.models import Edge, NetworkDataset, Stop

from .geo_utils import METERS_PER_DEGREE, planar_distance_m

logger = logging.getLogger(__name__)

MAX_WALK_DISTANCE_M = 1000.0
WALK_SPEED_MPS = 1.4


@dataclass(frozen=True, slots=True)
class BuildStats:
    nodes: int
    transit_edges: int
    walk_edges: int
    dropped_segments: int


class TransitGraph:
    """Directed multigraph of the network: stop id -> outgoing edges.

    Adjacency lists keep insertion order and never hold two structurally
    identical edges. Once built, the graph is only read.
    """

    def __init__(self) -> None:
        self._adjacency: dict[str, list[Edge]] = {}
        self._seen: dict[str, set[Edge]] = {}

    def add_node(self, stop_id: str) -> None:
        if stop_id not in self._adjacency:
            self._adjacency[stop_id] = []
            self._seen[stop_id] = set()

    def add_edge(self, edge: Edge) -> bool:
        """Append ``edge``; returns False when an identical edge already exists."""

        self.add_node(edge.from_stop_id)
        self.add_node(edge.to_stop_id)

        seen = self._seen[edge.from_stop_id]
        if edge in seen:
            return False
        seen.add(edge)
        self._adjacency[edge.from_stop_id].append(edge)
        return True

    def edges_from(self, stop_id: str) -> tuple[Edge, ...]:
        return tuple(self._adjacency.get(stop_id, ()))

    def edges(self) -> Iterator[Edge]:
        for edges in self._adjacency.values():
            yield from edges

    @property
    def nodes(self) -> tuple[str, ...]:
        return tuple(self._adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._adjacency.values())

    def __contains__(self, stop_id: object) -> bool:
        return stop_id in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def to_networkx(self) -> nx.MultiDiGraph:
        g = nx.MultiDiGraph()
        g.add_nodes_from(self._adjacency)
        for edge in self.edges():
            g.add_edge(
                edge.from_stop_id,
                edge.to_stop_id,
                line_id=edge.line_id,
                trip_id=edge.trip_id,
                duration_min=edge.duration_min,
            )
        return g

    @classmethod
    def build(
        cls,
        dataset: NetworkDataset,
        *,
        max_walk_distance_m: float = MAX_WALK_DISTANCE_M,
        walk_speed_mps: float = WALK_SPEED_MPS,
    ) -> TransitGraph:
        """Build the graph from a loaded network.

        1. every stop becomes a node;
        2. consecutive visits of each trip become transit edges;
        3. stops within walking distance get a pair of WALK edges.
        """

        graph = cls()
        for stop_id in dataset.stops_by_id:
            graph.add_node(stop_id)

        transit, dropped = graph._add_trip_edges(dataset)
        walk = graph._add_walk_edges(
            dataset.stops_by_id.values(),
            max_walk_distance_m=max_walk_distance_m,
            walk_speed_mps=walk_speed_mps,
        )

        stats = BuildStats(
            nodes=len(graph),
            transit_edges=transit,
            walk_edges=walk,
            dropped_segments=dropped,
        )
        logger.info(
            "Transit graph built: %d nodes, %d transit edges, %d walk edges, "
            "%d segments dropped",
            stats.nodes,
            stats.transit_edges,
            stats.walk_edges,
            stats.dropped_segments,
        )
        return graph

    def _add_trip_edges(self, dataset: NetworkDataset) -> tuple[int, int]:
        from .service_time import time_delta_min

        added = 0
        dropped = 0
        for trip_id, visit in dataset.visits_by_trip.items():
            line_id = dataset.line_id_by_trip.get(trip_id)
            for a, b in zip(visit.entries, visit.entries[1:]):
                try:
                    duration = time_delta_min(a.departure_time, b.departure_time)
                except ValueError:
                    logger.debug(
                        "Trip %s: unparseable time between %s and %s, edge omitted",
                        trip_id,
                        a.stop_id,
                        b.stop_id,
                    )
                    dropped += 1
                    continue

                # No midnight wraparound: a later visit earlier in the day is dropped.
                if duration < 0:
                    dropped += 1
                    continue

                if self.add_edge(
                    Edge(
                        from_stop_id=a.stop_id,
                        to_stop_id=b.stop_id,
                        line_id=line_id,
                        duration_min=duration,
                        trip_id=trip_id,
                    )
                ):
                    added += 1
        return added, dropped

    def _add_walk_edges(
        self,
        stops: Iterable[Stop],
        *,
        max_walk_distance_m: float,
        walk_speed_mps: float,
    ) -> int:
        ordered = list(stops)
        added = 0
        for i, j in _nearby_pairs(ordered, max_walk_distance_m):
            a, b = ordered[i], ordered[j]
            distance_m = planar_distance_m(a.location, b.location)
            if not 0.0 < distance_m <= max_walk_distance_m:
                continue

            duration_min = distance_m / walk_speed_mps / 60.0
            added += self.add_edge(Edge.walk(a.id, b.id, duration_min))
            added += self.add_edge(Edge.walk(b.id, a.id, duration_min))
        return added


def _nearby_pairs(stops: list[Stop], radius_m: float) -> Iterator[tuple[int, int]]:
    """Yield index pairs ``i < j`` that may lie within ``radius_m``.

    Stops are bucketed on a grid whose cells are ``radius_m`` wide, so only
    the 3x3 neighbourhood of a cell needs checking. Pairs come out in the same
    order as a full ``for i: for j > i`` scan.
    """

    if radius_m <= 0 or not stops:
        return

    cell = radius_m / METERS_PER_DEGREE
    buckets: dict[tuple[int, int], list[int]] = defaultdict(list)
    keys: list[tuple[int, int]] = []
    for idx, stop in enumerate(stops):
        key = (
            math.floor(stop.location.lat / cell),
            math.floor(stop.location.lon / cell),
        )
        buckets[key].append(idx)
        keys.append(key)

    for i, (row, col) in enumerate(keys):
        candidates: list[int] = []
        for d_row in (-1, 0, 1):
            for d_col in (-1, 0, 1):
                candidates.extend(
                    j for j in buckets.get((row + d_row, col + d_col), ()) if j > i
                )
        candidates.sort()
        for j in candidates:
            yield i, j
