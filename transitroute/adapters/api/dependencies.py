from __future__ import annotations

from functools import lru_cache

from transitroute.adapters.persistence import CsvNetworkRepository
from transitroute.app.services.routing_service import RoutingService
from transitroute.config import RouterConfig


@lru_cache(maxsize=1)
def get_routing_service() -> RoutingService:
    # Loading and graph building happen once per process; the service is
    # read-only afterwards and shared by all requests.
    config = RouterConfig.from_env()
    repository = CsvNetworkRepository(base_paths=config.data_paths)
    return RoutingService.from_repository(repository, config)
