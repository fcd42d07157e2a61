from .data import DataSourceFailure, MalformedRecord, NetworkDataError
from .routing import NoPathFound, RoutingError, UnknownStop

__all__ = [
    "DataSourceFailure",
    "MalformedRecord",
    "NetworkDataError",
    "NoPathFound",
    "RoutingError",
    "UnknownStop",
]
