from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Iterable

import networkx as nx

from transitroute.app.ports.output import INetworkRepository
from transitroute.config import RouterConfig
from transitroute.domain.algorithms.astar import ModePreferences, PathFinder
from transitroute.domain.algorithms.service_time import parse_time_of_day
from transitroute.domain.algorithms.transit_graph import TransitGraph
from transitroute.domain.exceptions import NoPathFound, UnknownStop
from transitroute.domain.models import NetworkDataset, Route

from .itinerary import build_route

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoutingService:
    """Application service (use case) for stop-to-stop route queries.

    Owns one dataset and the graph built from it; both are read-only, so a
    single service can answer queries for the lifetime of the process.
    """

    dataset: NetworkDataset
    graph: TransitGraph
    config: RouterConfig = field(default_factory=RouterConfig)
    path_finder: PathFinder = field(init=False)

    def __post_init__(self) -> None:
        self.path_finder = PathFinder(
            graph=self.graph,
            dataset=self.dataset,
            preference_weight=self.config.mode_preference_weight,
        )

    @classmethod
    def from_dataset(
        cls, dataset: NetworkDataset, config: RouterConfig | None = None
    ) -> RoutingService:
        cfg = config or RouterConfig()
        started = time.perf_counter()
        graph = TransitGraph.build(
            dataset,
            max_walk_distance_m=cfg.max_walk_distance_m,
            walk_speed_mps=cfg.walk_speed_mps,
        )
        logger.info("Graph created in %.3f s", time.perf_counter() - started)
        return cls(dataset=dataset, graph=graph, config=cfg)

    @classmethod
    def from_repository(
        cls, repository: INetworkRepository, config: RouterConfig | None = None
    ) -> RoutingService:
        started = time.perf_counter()
        dataset = repository.load_dataset()
        logger.info(
            "Network loaded in %.3f s: %d stops, %d lines, %d trips",
            time.perf_counter() - started,
            len(dataset.stops_by_id),
            len(dataset.lines_by_id),
            len(dataset.visits_by_trip),
        )
        return cls.from_dataset(dataset, config)

    def find_route(
        self,
        *,
        origin: str,
        destination: str,
        depart_at: str,
        options: Iterable[str] = (),
    ) -> Route:
        start_time_min = parse_time_of_day(depart_at)

        origin_id = self.dataset.find_stop_id(origin)
        if origin_id is None:
            raise UnknownStop(origin)
        destination_id = self.dataset.find_stop_id(destination)
        if destination_id is None:
            raise UnknownStop(destination)

        started = time.perf_counter()
        edges = self.path_finder.search_ids(
            origin_id,
            destination_id,
            start_time_min,
            ModePreferences.from_tokens(
                options, weight=self.config.mode_preference_weight
            ),
        )
        logger.info(
            "Request %r -> %r at %s done in %.3f s",
            origin,
            destination,
            depart_at,
            time.perf_counter() - started,
        )
        if edges is None:
            raise NoPathFound(f"No route from {origin!r} to {destination!r} at {depart_at}")

        return build_route(
            self.dataset,
            edges,
            start_time_min=start_time_min,
            origin_stop_id=origin_id,
            destination_stop_id=destination_id,
        )

    def network_summary(self) -> dict[str, Any]:
        g = self.graph.to_networkx()
        walk_edges = sum(1 for e in self.graph.edges() if e.is_walk)
        return {
            "stops": len(self.dataset.stops_by_id),
            "lines": len(self.dataset.lines_by_id),
            "trips": len(self.dataset.visits_by_trip),
            "nodes": g.number_of_nodes(),
            "edges": g.number_of_edges(),
            "walk_edges": walk_edges,
            "transit_edges": g.number_of_edges() - walk_edges,
            "components": (
                nx.number_weakly_connected_components(g) if g.number_of_nodes() else 0
            ),
        }
