from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """WGS84 position in decimal degrees."""

    lat: float
    lon: float

    def __post_init__(self) -> None:
        # NaN fails both comparisons and is rejected too.
        if not (-90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0):
            raise ValueError(f"Coordinates out of range: ({self.lat}, {self.lon})")

    @classmethod
    def parse(cls, lat: str, lon: str) -> GeoPoint:
        return cls(lat=float(lat), lon=float(lon))

    def degree_delta(self, other: GeoPoint) -> tuple[float, float]:
        return (self.lat - other.lat, self.lon - other.lon)
