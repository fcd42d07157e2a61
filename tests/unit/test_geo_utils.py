from __future__ import annotations

import pytest

from transitroute.domain.algorithms.geo_utils import (
    METERS_PER_DEGREE,
    kmh_to_m_per_min,
    planar_distance_m,
)
from transitroute.domain.models.geo import GeoPoint


def test_planar_distance_zero_for_identical_points() -> None:
    p = GeoPoint(lat=50.84, lon=4.35)
    assert planar_distance_m(p, p) == 0.0


def test_planar_distance_scales_degrees_to_meters_and_is_symmetric() -> None:
    a = GeoPoint(lat=0.0, lon=0.0)
    b = GeoPoint(lat=0.003, lon=0.004)

    d1 = planar_distance_m(a, b)
    d2 = planar_distance_m(b, a)

    assert d1 == pytest.approx(0.005 * METERS_PER_DEGREE)
    assert abs(d1 - d2) < 1e-9


def test_kmh_to_m_per_min() -> None:
    assert kmh_to_m_per_min(30.0) == pytest.approx(500.0)
    assert kmh_to_m_per_min(60.0) == pytest.approx(1000.0)
