"""Driver session: wires the order pool, route composer and execution tracker.

One planning cycle moves through the selection, route and delivery views.
Selection changes recompute both routes; starting delivery fixes which of
the two routes is executed until the run ends or is abandoned.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..errors import InvalidTransition, InvariantViolation
from ..models.domain import Order, SessionView, TrackerState
from .delivery.tracker import ExecutionTracker
from .events import SELECTION_CHANGED, EventBus
from .orders.pool import OrderPool
from .routing.composer import CostModel, RouteComposer, ScoringWeights
from .routing.models import RouteMetrics, RouteSummary

logger = logging.getLogger(__name__)


class DriverSession:
    def __init__(
        self,
        orders: Iterable[Order] = (),
        *,
        events: EventBus | None = None,
        weights: ScoringWeights | None = None,
        cost_model: CostModel | None = None,
    ) -> None:
        self.events = events or EventBus()
        self.pool = OrderPool(orders)
        self.composer = RouteComposer(self.pool, weights=weights, cost_model=cost_model)
        self.tracker = ExecutionTracker(self.pool, self.events)
        self.current_view = SessionView.SELECTION
        self.using_suggested_route = True

    # --- Read views ---

    @property
    def active_order_id(self) -> Optional[str]:
        return self.tracker.active_order_id

    @property
    def tracker_state(self) -> TrackerState:
        return self.tracker.state

    @property
    def suggested_route(self) -> List[str]:
        return self.composer.suggested_route

    @property
    def custom_route(self) -> List[str]:
        return self.composer.custom_route

    @property
    def active_route(self) -> List[str]:
        if self.current_view is SessionView.DELIVERY:
            return self.tracker.route
        return self.composer.route(self.using_suggested_route)

    def orders(self) -> List[Order]:
        return self.pool.snapshot()

    def selected_ids(self) -> List[str]:
        return self.pool.selected_ids()

    def metrics(self) -> RouteMetrics:
        return self.composer.metrics(self.selected_ids())

    def summary(self, use_suggested: bool | None = None) -> RouteSummary:
        if use_suggested is None and self.current_view is SessionView.DELIVERY:
            return self.composer.summary(self.tracker.route)
        if use_suggested is None:
            use_suggested = self.using_suggested_route
        return self.composer.summary(self.composer.route(use_suggested))

    # --- Selection view ---

    def select(self, order_id: str) -> None:
        self._require_planning("select orders")
        self.pool.select(order_id)
        self._selection_changed()

    def deselect(self, order_id: str) -> None:
        self._require_planning("deselect orders")
        self.pool.deselect(order_id)
        self._selection_changed()

    def select_all(self) -> None:
        self._require_planning("select orders")
        self.pool.select_all()
        self._selection_changed()

    def deselect_all(self) -> None:
        self._require_planning("deselect orders")
        self.pool.deselect_all()
        self._selection_changed()

    def review_route(self) -> None:
        if self.current_view is not SessionView.SELECTION:
            raise InvalidTransition(f"Cannot review the route from the {self.current_view.value} view.")
        if not self.pool.selected_ids():
            raise InvalidTransition("Select at least one order before reviewing the route.")
        self.current_view = SessionView.ROUTE

    # --- Route view ---

    def back_to_selection(self) -> None:
        if self.current_view is not SessionView.ROUTE:
            raise InvalidTransition(f"Cannot return to selection from the {self.current_view.value} view.")
        self.current_view = SessionView.SELECTION

    def move_up(self, order_id: str) -> None:
        self._require_planning("reorder the route")
        self.composer.move_up(order_id)

    def move_down(self, order_id: str) -> None:
        self._require_planning("reorder the route")
        self.composer.move_down(order_id)

    def adjust_weights(self, wait_time_weight: float, distance_weight: float) -> None:
        """Re-prioritise wait time against distance and rebuild both routes."""
        self._require_planning("adjust route priorities")
        if wait_time_weight < 0 or distance_weight < 0:
            raise ValueError("Priority weights must be >= 0.")
        self.composer.weights = ScoringWeights(
            wait_time_weight=wait_time_weight,
            distance_weight=distance_weight,
        )
        logger.info("Route priorities set to wait=%s distance=%s", wait_time_weight, distance_weight)
        self.composer.recompute(self.pool.selected_ids())
        self.check_invariants()

    def start_delivery(self, use_suggested: bool = True) -> str:
        if self.current_view is not SessionView.ROUTE:
            raise InvalidTransition(f"Cannot start delivery from the {self.current_view.value} view.")
        self.check_invariants()
        first = self.tracker.start(self.composer.route(use_suggested))
        self.using_suggested_route = use_suggested
        self.current_view = SessionView.DELIVERY
        logger.info("Delivery started on the %s route", "suggested" if use_suggested else "custom")
        return first

    # --- Delivery view ---

    def complete_delivery(self, order_id: str) -> Optional[str]:
        return self.tracker.complete(order_id)

    def progress(self) -> tuple[int, int]:
        return self.tracker.progress()

    def abandon_route(self) -> None:
        """Stop executing; undelivered stops go back to route planning."""
        if self.current_view is not SessionView.DELIVERY:
            raise InvalidTransition("No route is being delivered.")
        self.tracker.reset()
        self.composer.recompute(self.pool.selected_ids())
        self.current_view = SessionView.ROUTE if self.pool.selected_ids() else SessionView.SELECTION
        self.events.emit(SELECTION_CHANGED, self.pool.selected_ids())

    def new_cycle(self) -> None:
        """Begin a new planning cycle from the selection view."""
        self.tracker.reset()
        self.pool.reset()
        self.composer.clear()
        self.current_view = SessionView.SELECTION
        self.using_suggested_route = True
        logger.info("New planning cycle started")
        self.events.emit(SELECTION_CHANGED, [])

    # --- Invariants ---

    def check_invariants(self) -> None:
        """Both routes must hold exactly the selected ids, once each."""
        selected = set(self.pool.selected_ids())
        for name, route in (("suggested", self.composer.suggested_route), ("custom", self.composer.custom_route)):
            if len(route) != len(set(route)) or set(route) != selected:
                raise InvariantViolation(
                    f"The {name} route {route} does not match the selected orders {sorted(selected)}."
                )

    def _require_planning(self, action: str) -> None:
        if self.current_view is SessionView.DELIVERY:
            raise InvalidTransition(f"Cannot {action} while a route is being delivered.")

    def _selection_changed(self) -> None:
        selected = self.pool.selected_ids()
        self.composer.recompute(selected)
        self.check_invariants()
        self.events.emit(SELECTION_CHANGED, selected)
