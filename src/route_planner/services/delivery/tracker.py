"""Execution tracker: walks a fixed route one stop at a time."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ...errors import InvalidTransition
from ...models.domain import OrderStatus, TrackerState
from ..events import DELIVERY_COMPLETE, DELIVERY_START, EventBus
from ..orders.pool import OrderPool

logger = logging.getLogger(__name__)


class ExecutionTracker:
    """IDLE -> RUNNING -> COMPLETE state machine over one chosen route.

    The route is copied when the run starts and never reordered; the next
    stop is always the first pending order after the completed one.
    """

    def __init__(self, pool: OrderPool, events: EventBus | None = None) -> None:
        self.pool = pool
        self.events = events or EventBus()
        self.state = TrackerState.IDLE
        self.active_order_id: Optional[str] = None
        self._route: List[str] = []

    @property
    def route(self) -> List[str]:
        return list(self._route)

    def start(self, route: Sequence[str]) -> str:
        if self.state is TrackerState.RUNNING:
            raise InvalidTransition("A route is already running.")
        if not route:
            raise InvalidTransition("Cannot start an empty route.")
        if len(set(route)) != len(route):
            raise InvalidTransition("Route contains duplicate stops.")
        for order in self.pool.orders_for(route):
            if order.status is not OrderStatus.SELECTED:
                raise InvalidTransition(f"Order '{order.id}' is {order.status.value}, not selected.")

        first = route[0]
        self.pool.mark_in_progress(first)
        self._route = list(route)
        self.active_order_id = first
        self.state = TrackerState.RUNNING
        logger.info("Route started with %d stops, first stop %s", len(self._route), first)

        self.events.emit(DELIVERY_START, first)
        return first

    def complete(self, order_id: str) -> Optional[str]:
        """Deliver the active stop and advance; returns the next active id."""
        if self.state is not TrackerState.RUNNING:
            raise InvalidTransition(f"No route is running (state: {self.state.value}).")
        if order_id != self.active_order_id:
            logger.warning("Rejected completion of %s; active stop is %s", order_id, self.active_order_id)
            raise InvalidTransition(f"Order '{order_id}' is not the active stop.")

        self.pool.mark_delivered(order_id)
        next_id = self._next_pending(self._route.index(order_id))
        if next_id is not None:
            self.pool.mark_in_progress(next_id)
            self.active_order_id = next_id
        else:
            self.active_order_id = None
            self.state = TrackerState.COMPLETE
        logger.info("Delivered %s; next stop %s", order_id, next_id or "none (route complete)")

        self.events.emit(DELIVERY_COMPLETE, order_id)
        if next_id is not None:
            self.events.emit(DELIVERY_START, next_id)
        return next_id

    def reset(self) -> None:
        """Abandon the run. Delivered orders stay delivered."""
        if self.active_order_id is not None:
            self.pool.release(self.active_order_id)
        if self.state is TrackerState.RUNNING:
            logger.info("Route abandoned at stop %s", self.active_order_id)
        self.state = TrackerState.IDLE
        self.active_order_id = None
        self._route = []

    def progress(self) -> Tuple[int, int]:
        delivered = sum(1 for order in self.pool.orders_for(self._route) if order.status is OrderStatus.DELIVERED)
        return delivered, len(self._route)

    def _next_pending(self, index: int) -> Optional[str]:
        for order_id in self._route[index + 1:]:
            if self.pool.get(order_id).status is OrderStatus.SELECTED:
                return order_id
        return None
