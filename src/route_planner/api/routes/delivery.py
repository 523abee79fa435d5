"""Delivery execution endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...schemas.routing import CompleteDeliveryRequest, DeliveryStatusResponse, StartDeliveryRequest
from ...services.registry import registry
from ...services.session import DriverSession
from ..errors import to_http_exception

router = APIRouter(prefix="/sessions/{driver_id}/delivery", tags=["delivery"])


def _status_response(session: DriverSession) -> DeliveryStatusResponse:
    delivered, total = session.progress()
    return DeliveryStatusResponse(
        state=session.tracker_state.value,
        active_order_id=session.active_order_id,
        route=session.tracker.route,
        delivered=delivered,
        total=total,
    )


@router.get("", response_model=DeliveryStatusResponse, status_code=status.HTTP_200_OK)
def delivery_status(driver_id: str) -> DeliveryStatusResponse:
    try:
        return _status_response(registry.get(driver_id))
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/start", response_model=DeliveryStatusResponse, status_code=status.HTTP_200_OK)
def start_delivery(driver_id: str, payload: StartDeliveryRequest | None = None) -> DeliveryStatusResponse:
    payload = payload or StartDeliveryRequest()
    try:
        session = registry.get(driver_id)
        session.start_delivery(use_suggested=payload.use_suggested)
        return _status_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/complete", response_model=DeliveryStatusResponse, status_code=status.HTTP_200_OK)
def complete_delivery(driver_id: str, payload: CompleteDeliveryRequest) -> DeliveryStatusResponse:
    try:
        session = registry.get(driver_id)
        session.complete_delivery(payload.order_id)
        return _status_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/abandon", response_model=DeliveryStatusResponse, status_code=status.HTTP_200_OK)
def abandon_delivery(driver_id: str) -> DeliveryStatusResponse:
    try:
        session = registry.get(driver_id)
        session.abandon_route()
        return _status_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc
