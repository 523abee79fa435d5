"""Order pool: candidate deliveries and their selection/lifecycle status."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from ...errors import InvalidTransition, NotFound
from ...models.domain import Order, OrderStatus

logger = logging.getLogger(__name__)


class OrderPool:
    """In-memory id -> Order index owned by a single driver session.

    Routes hold order ids only; every status change goes through this pool
    so an order's status has exactly one source.
    """

    def __init__(self, orders: Iterable[Order] = ()) -> None:
        self._orders: Dict[str, Order] = {}
        for order in orders:
            self.add(order)

    def add(self, order: Order) -> None:
        if order.id in self._orders:
            raise InvalidTransition(f"Order '{order.id}' is already in the pool.")
        if order.wait_time < 0 or order.distance < 0:
            raise ValueError(f"Order '{order.id}' has a negative wait time or distance.")
        self._orders[order.id] = order

    def get(self, order_id: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise NotFound(order_id)
        return order

    def __contains__(self, order_id: object) -> bool:
        return order_id in self._orders

    def __len__(self) -> int:
        return len(self._orders)

    def snapshot(self) -> List[Order]:
        return list(self._orders.values())

    def orders_for(self, order_ids: Sequence[str]) -> List[Order]:
        return [self.get(order_id) for order_id in order_ids]

    def selected_ids(self) -> List[str]:
        return [order.id for order in self._orders.values() if order.status is OrderStatus.SELECTED]

    def is_route_active(self) -> bool:
        return any(order.status is OrderStatus.IN_PROGRESS for order in self._orders.values())

    # --- Selection ---

    def select(self, order_id: str) -> None:
        order = self._require_editable(order_id)
        if order.status is not OrderStatus.AVAILABLE:
            raise InvalidTransition(f"Order '{order_id}' cannot be selected while {order.status.value}.")
        order.status = OrderStatus.SELECTED
        logger.debug("Selected order %s", order_id)

    def deselect(self, order_id: str) -> None:
        order = self._require_editable(order_id)
        if order.status is not OrderStatus.SELECTED:
            raise InvalidTransition(f"Order '{order_id}' is not selected (status: {order.status.value}).")
        order.status = OrderStatus.AVAILABLE
        logger.debug("Deselected order %s", order_id)

    def select_all(self) -> List[str]:
        """Select every available order; returns the ids that changed."""
        self._require_no_route()
        changed = [order.id for order in self._orders.values() if order.status is OrderStatus.AVAILABLE]
        for order_id in changed:
            self._orders[order_id].status = OrderStatus.SELECTED
        logger.debug("Selected all %d available orders", len(changed))
        return changed

    def deselect_all(self) -> List[str]:
        """Clear the selection; delivered orders are untouched."""
        self._require_no_route()
        changed = self.selected_ids()
        for order_id in changed:
            self._orders[order_id].status = OrderStatus.AVAILABLE
        logger.debug("Deselected %d orders", len(changed))
        return changed

    def reset(self) -> None:
        """Start a new planning cycle. Delivered orders stay delivered.

        Raises ``InvalidTransition`` while a route is executing; reset the
        tracker first.
        """
        self._require_no_route()
        for order in self._orders.values():
            if order.status is not OrderStatus.DELIVERED:
                order.status = OrderStatus.AVAILABLE
        logger.info("Order pool reset (%d orders)", len(self._orders))

    # --- Execution transitions (driven by the tracker) ---

    def mark_in_progress(self, order_id: str) -> Order:
        order = self.get(order_id)
        if order.status is not OrderStatus.SELECTED:
            raise InvalidTransition(f"Order '{order_id}' cannot start from {order.status.value}.")
        order.status = OrderStatus.IN_PROGRESS
        return order

    def mark_delivered(self, order_id: str) -> Order:
        order = self.get(order_id)
        if order.status is not OrderStatus.IN_PROGRESS:
            raise InvalidTransition(f"Order '{order_id}' cannot be delivered from {order.status.value}.")
        order.status = OrderStatus.DELIVERED
        return order

    def release(self, order_id: str) -> None:
        """Put an abandoned in-progress order back into the selection."""
        order = self.get(order_id)
        if order.status is OrderStatus.IN_PROGRESS:
            order.status = OrderStatus.SELECTED

    def _require_editable(self, order_id: str) -> Order:
        order = self.get(order_id)
        self._require_no_route()
        return order

    def _require_no_route(self) -> None:
        if self.is_route_active():
            logger.warning("Rejected selection change: a route is executing")
            raise InvalidTransition("Selection cannot change while a route is executing.")
