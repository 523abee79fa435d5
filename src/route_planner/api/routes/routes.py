"""Route planning endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Response, status

from ...schemas.routing import (
    MoveStopRequest,
    RouteMetricsModel,
    RouteResponse,
    RouteStopModel,
    RouteWeightsRequest,
)
from ...services.outputs.route_formatter import route_summary_to_csv
from ...services.registry import registry
from ...services.session import DriverSession
from ..errors import to_http_exception

router = APIRouter(prefix="/sessions/{driver_id}/route", tags=["routes"])


def _route_response(session: DriverSession) -> RouteResponse:
    summary = session.summary()
    return RouteResponse(
        current_view=session.current_view.value,
        suggested_route=session.suggested_route,
        custom_route=session.custom_route,
        using_suggested_route=session.using_suggested_route,
        metrics=RouteMetricsModel(**asdict(session.metrics())),
        stops=[RouteStopModel(**asdict(stop)) for stop in summary.stops],
    )


@router.get("", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def get_route(driver_id: str) -> RouteResponse:
    try:
        return _route_response(registry.get(driver_id))
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/review", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def review_route(driver_id: str) -> RouteResponse:
    try:
        session = registry.get(driver_id)
        session.review_route()
        return _route_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/back", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def back_to_selection(driver_id: str) -> RouteResponse:
    try:
        session = registry.get(driver_id)
        session.back_to_selection()
        return _route_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/move", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def move_stop(driver_id: str, payload: MoveStopRequest) -> RouteResponse:
    """Swap a stop of the custom route with its neighbour."""
    try:
        session = registry.get(driver_id)
        if payload.direction == "up":
            session.move_up(payload.order_id)
        else:
            session.move_down(payload.order_id)
        return _route_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/weights", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def adjust_weights(driver_id: str, payload: RouteWeightsRequest) -> RouteResponse:
    """Change the wait-time vs distance priority and recompute both routes."""
    try:
        session = registry.get(driver_id)
        session.adjust_weights(payload.wait_time_weight, payload.distance_weight)
        return _route_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.get("/manifest.csv", status_code=status.HTTP_200_OK)
def route_manifest(driver_id: str) -> Response:
    try:
        summary = registry.get(driver_id).summary()
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return Response(content=route_summary_to_csv(summary), media_type="text/csv")
