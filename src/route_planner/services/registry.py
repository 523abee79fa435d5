"""In-process registry holding one driver session per driver id."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable

from ..data.orders_repository import load_orders
from ..errors import SessionNotFound
from ..models.domain import Order
from .session import DriverSession

logger = logging.getLogger(__name__)

OrderSource = Callable[[], Iterable[Order]]


def _fresh_orders(source: OrderSource) -> list[Order]:
    # Each session owns its own Order objects.
    return [replace(order, order_items=list(order.order_items)) for order in source()]


class SessionRegistry:
    """Sessions exist only between an explicit ``open`` and ``close``."""

    def __init__(self, order_source: OrderSource = load_orders) -> None:
        self._order_source = order_source
        self._sessions: Dict[str, DriverSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self, driver_id: str) -> tuple[DriverSession, bool]:
        """Return the driver's session, creating it if needed, and whether it is new."""
        session = self._sessions.get(driver_id)
        if session is not None:
            return session, False
        session = DriverSession(_fresh_orders(self._order_source))
        self._sessions[driver_id] = session
        logger.info("Opened session for driver %s with %d orders", driver_id, len(session.pool))
        return session, True

    def get(self, driver_id: str) -> DriverSession:
        session = self._sessions.get(driver_id)
        if session is None:
            raise SessionNotFound(driver_id)
        return session

    def close(self, driver_id: str) -> None:
        if self._sessions.pop(driver_id, None) is None:
            raise SessionNotFound(driver_id)
        logger.info("Closed session for driver %s", driver_id)

    def clear(self) -> None:
        self._sessions.clear()


registry = SessionRegistry()
