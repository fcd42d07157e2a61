import math

import pytest
from transitroute.domain.models.geo import GeoPoint


def test_parse_reads_decimal_degrees() -> None:
    p = GeoPoint.parse("50.8467", " 4.3525")
    assert (p.lat, p.lon) == (50.8467, 4.3525)


@pytest.mark.parametrize(
    ("lat", "lon"),
    [
        (-90.0001, 0.0),
        (90.0001, 0.0),
        (0.0, -180.0001),
        (0.0, 180.0001),
        (math.nan, 0.0),
    ],
)
def test_out_of_range_coordinates_are_rejected(lat: float, lon: float) -> None:
    with pytest.raises(ValueError, match="out of range"):
        GeoPoint(lat=lat, lon=lon)


def test_parse_rejects_non_numbers() -> None:
    with pytest.raises(ValueError):
        GeoPoint.parse("north", "4.35")


def test_degree_delta_is_signed() -> None:
    a = GeoPoint(lat=1.5, lon=2.0)
    b = GeoPoint(lat=1.0, lon=3.0)
    assert a.degree_delta(b) == (0.5, -1.0)
