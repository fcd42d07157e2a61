from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

TIME_OF_DAY_PATTERN = r"^\d{2,}:\d{2}:\d{2}$"


class TransitLineSchema(BaseModel):
    route_id: str
    short_name: str | None = None
    long_name: str | None = None


class RouteLegSchema(BaseModel):
    mode: Literal["walk", "bus", "tram", "metro", "train"] | None
    origin_stop_id: str
    destination_stop_id: str
    origin_name: str | None = None
    destination_name: str | None = None
    depart_at: str | None = None
    arrive_at: str | None = None
    duration_min: float
    stop_ids: list[str] = []
    line: TransitLineSchema | None = None
    trip_id: str | None = None


class RouteSchema(BaseModel):
    origin_stop_id: str
    destination_stop_id: str
    origin_name: str | None = None
    destination_name: str | None = None
    depart_at: str
    arrive_at: str
    legs: list[RouteLegSchema] = []

    total_duration_min: float


class RouteRequestSchema(BaseModel):
    origin: str = Field(..., min_length=1, description="Stop name")
    destination: str = Field(..., min_length=1, description="Stop name")
    depart_at: str = Field(..., pattern=TIME_OF_DAY_PATTERN, examples=["08:15:00"])
    options: list[str] = Field(
        default_factory=list,
        description="-MODE avoids a mode, -NMODE prefers it (e.g. -BUS, -NTRAIN)",
    )


class NetworkSummarySchema(BaseModel):
    stops: int
    lines: int
    trips: int
    nodes: int
    edges: int
    walk_edges: int
    transit_edges: int
    components: int
