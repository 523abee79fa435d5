"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/orders", status_code=status.HTTP_200_OK)
def health_orders() -> dict:
    """Check that the seed orders file can be loaded."""
    from ...data.orders_repository import load_orders

    try:
        orders = load_orders()
        return {"source": str(settings.orders_file), "healthy": True, "orders": len(orders)}
    except Exception as e:
        return {"source": str(settings.orders_file), "healthy": False, "error": str(e)}
