from .edge import WALK, Edge
from .geo import GeoPoint
from .network import (
    Line,
    NetworkDataset,
    ScheduledVisit,
    Stop,
    TravelMode,
    VisitEntry,
)
from .route import Route, RouteLeg

__all__ = [
    "WALK",
    "Edge",
    "GeoPoint",
    "Line",
    "NetworkDataset",
    "Route",
    "RouteLeg",
    "ScheduledVisit",
    "Stop",
    "TravelMode",
    "VisitEntry",
]
