from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from transitroute.adapters.api.dependencies import get_routing_service
from transitroute.adapters.api.schemas.routes import (
    NetworkSummarySchema,
    RouteLegSchema,
    RouteRequestSchema,
    RouteSchema,
    TransitLineSchema,
)
from transitroute.app.services.routing_service import RoutingService
from transitroute.domain.algorithms.service_time import format_time_of_day
from transitroute.domain.exceptions import NoPathFound
from transitroute.domain.models import Route

router = APIRouter(tags=["routes"])


def _time(minutes: float | None) -> str | None:
    return format_time_of_day(minutes) if minutes is not None else None


def _route_to_schema(route: Route) -> RouteSchema:
    return RouteSchema(
        origin_stop_id=route.origin_stop_id,
        destination_stop_id=route.destination_stop_id,
        origin_name=route.origin_name,
        destination_name=route.destination_name,
        depart_at=format_time_of_day(route.depart_min),
        arrive_at=format_time_of_day(route.arrive_min),
        legs=[
            RouteLegSchema(
                mode=leg.mode.value if leg.mode is not None else None,
                origin_stop_id=leg.origin_stop_id,
                destination_stop_id=leg.destination_stop_id,
                origin_name=leg.origin_name,
                destination_name=leg.destination_name,
                depart_at=_time(leg.depart_min),
                arrive_at=_time(leg.arrive_min),
                duration_min=leg.duration_min,
                stop_ids=list(leg.stop_ids),
                line=(
                    TransitLineSchema(
                        route_id=leg.line.id,
                        short_name=leg.line.short_name,
                        long_name=leg.line.long_name,
                    )
                    if leg.line is not None
                    else None
                ),
                trip_id=leg.trip_id,
            )
            for leg in route.legs
        ],
        total_duration_min=route.total_duration_min,
    )


@router.post("/routes", response_model=RouteSchema)
def calculate_route(
    req: RouteRequestSchema,
    service: RoutingService = Depends(get_routing_service),
) -> RouteSchema:
    try:
        route = service.find_route(
            origin=req.origin,
            destination=req.destination,
            depart_at=req.depart_at,
            options=req.options,
        )
    except NoPathFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _route_to_schema(route)


@router.get("/network", response_model=NetworkSummarySchema)
def network_summary(
    service: RoutingService = Depends(get_routing_service),
) -> NetworkSummarySchema:
    return NetworkSummarySchema(**service.network_summary())
