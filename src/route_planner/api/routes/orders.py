"""Order pool endpoints for a driver session."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from ...schemas.orders import OrderModel, OrderPoolResponse
from ...services.registry import registry
from ...services.session import DriverSession
from ..errors import to_http_exception

router = APIRouter(prefix="/sessions/{driver_id}", tags=["orders"])


def _pool_response(session: DriverSession) -> OrderPoolResponse:
    return OrderPoolResponse(
        orders=[OrderModel.from_order(order) for order in session.orders()],
        selected_ids=session.selected_ids(),
        current_view=session.current_view.value,
    )


@router.post("", response_model=OrderPoolResponse, status_code=status.HTTP_200_OK)
def open_session(driver_id: str, response: Response) -> OrderPoolResponse:
    """Open the driver's session, seeded from the order source; idempotent."""
    try:
        session, created = registry.open(driver_id)
        if created:
            response.status_code = status.HTTP_201_CREATED
        return _pool_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def close_session(driver_id: str) -> Response:
    try:
        registry.close(driver_id)
    except Exception as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/orders", response_model=OrderPoolResponse, status_code=status.HTTP_200_OK)
def list_orders(driver_id: str) -> OrderPoolResponse:
    try:
        return _pool_response(registry.get(driver_id))
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/orders/{order_id}/select", response_model=OrderPoolResponse, status_code=status.HTTP_200_OK)
def select_order(driver_id: str, order_id: str) -> OrderPoolResponse:
    try:
        session = registry.get(driver_id)
        session.select(order_id)
        return _pool_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/orders/{order_id}/deselect", response_model=OrderPoolResponse, status_code=status.HTTP_200_OK)
def deselect_order(driver_id: str, order_id: str) -> OrderPoolResponse:
    try:
        session = registry.get(driver_id)
        session.deselect(order_id)
        return _pool_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/reset", response_model=OrderPoolResponse, status_code=status.HTTP_200_OK)
def reset_session(driver_id: str) -> OrderPoolResponse:
    """Start a new planning cycle; delivered orders stay delivered."""
    try:
        session = registry.get(driver_id)
        session.new_cycle()
        return _pool_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/orders/select-all", response_model=OrderPoolResponse, status_code=status.HTTP_200_OK)
def select_all_orders(driver_id: str) -> OrderPoolResponse:
    try:
        session = registry.get(driver_id)
        session.select_all()
        return _pool_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc


@router.post("/orders/deselect-all", response_model=OrderPoolResponse, status_code=status.HTTP_200_OK)
def deselect_all_orders(driver_id: str) -> OrderPoolResponse:
    try:
        session = registry.get(driver_id)
        session.deselect_all()
        return _pool_response(session)
    except Exception as exc:
        raise to_http_exception(exc) from exc
