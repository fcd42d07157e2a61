from __future__ import annotations

import math

from transitroute.domain.models import GeoPoint

# Flat approximation of one degree of latitude (and, near the equator, of
# longitude). Used for both walking edges and the search heuristic.
METERS_PER_DEGREE = 111_000.0


def planar_distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Euclidean distance of the raw lat/lon delta, scaled to meters."""

    d_lat, d_lon = a.degree_delta(b)
    return math.sqrt(d_lat * d_lat + d_lon * d_lon) * METERS_PER_DEGREE


def kmh_to_m_per_min(speed_kmh: float) -> float:
    return speed_kmh * 1000.0 / 60.0
