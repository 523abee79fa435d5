"""Route composition: scored suggested order, editable custom order, metrics.

The suggested route is a priority ordering, not a shortest path: each
selected order gets ``score = w_wait * wait_time + w_dist * distance`` and
orders are visited by descending score. The custom route starts as a copy
of the suggested route and changes only through adjacent swaps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from ...config import settings
from ...errors import NotFound
from ...models.domain import Order
from ..orders.pool import OrderPool
from .models import RouteMetrics, RouteStop, RouteSummary

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScoringWeights:
    wait_time_weight: float = field(default_factory=lambda: settings.wait_time_weight)
    distance_weight: float = field(default_factory=lambda: settings.distance_weight)


@dataclass(slots=True)
class CostModel:
    handling_minutes_per_stop: float = field(default_factory=lambda: settings.handling_minutes_per_stop)
    minutes_per_mile: float = field(default_factory=lambda: settings.minutes_per_mile)


def priority_score(order: Order, weights: ScoringWeights | None = None) -> float:
    weights = weights or ScoringWeights()
    return weights.wait_time_weight * order.wait_time + weights.distance_weight * order.distance


def compute_suggested(orders: Sequence[Order], weights: ScoringWeights | None = None) -> List[str]:
    """Return the ids of ``orders`` by descending priority score.

    ``sorted`` is stable, so equal scores keep their input order.
    """
    weights = weights or ScoringWeights()
    ranked = sorted(orders, key=lambda order: priority_score(order, weights), reverse=True)
    return [order.id for order in ranked]


def seed_custom(suggested: Sequence[str]) -> List[str]:
    return list(suggested)


def _swap(route: List[str], index: int, other: int) -> None:
    route[index], route[other] = route[other], route[index]


def move_up(route: List[str], order_id: str) -> None:
    """Swap ``order_id`` with its predecessor. The first stop stays put."""
    if order_id not in route:
        raise NotFound(order_id, where="custom route")
    index = route.index(order_id)
    if index > 0:
        _swap(route, index, index - 1)


def move_down(route: List[str], order_id: str) -> None:
    """Swap ``order_id`` with its successor. The last stop stays put."""
    if order_id not in route:
        raise NotFound(order_id, where="custom route")
    index = route.index(order_id)
    if index < len(route) - 1:
        _swap(route, index, index + 1)


def total_distance(orders: Sequence[Order]) -> float:
    return sum(order.distance for order in orders)


def estimated_time(orders: Sequence[Order], cost_model: CostModel | None = None) -> float:
    cost_model = cost_model or CostModel()
    return (
        cost_model.handling_minutes_per_stop * len(orders)
        + cost_model.minutes_per_mile * total_distance(orders)
    )


def route_metrics(orders: Sequence[Order], cost_model: CostModel | None = None) -> RouteMetrics:
    return RouteMetrics(
        stop_count=len(orders),
        total_distance_miles=total_distance(orders),
        estimated_time_min=estimated_time(orders, cost_model),
    )


def summarize(
    orders: Sequence[Order],
    weights: ScoringWeights | None = None,
    cost_model: CostModel | None = None,
) -> RouteSummary:
    """Describe ``orders`` as visited in the given order, with cumulative ETAs."""
    cost_model = cost_model or CostModel()
    stops: list[RouteStop] = []
    for sequence, order in enumerate(orders, start=1):
        stops.append(
            RouteStop(
                order_id=order.id,
                sequence=sequence,
                score=priority_score(order, weights),
                distance_miles=order.distance,
                eta_min=estimated_time(orders[:sequence], cost_model),
                address=order.address,
                customer_name=order.customer_name,
            )
        )
    return RouteSummary(stops=stops, metrics=route_metrics(orders, cost_model))


class RouteComposer:
    """Holds the suggested and custom routes for the current selection."""

    def __init__(
        self,
        pool: OrderPool,
        *,
        weights: ScoringWeights | None = None,
        cost_model: CostModel | None = None,
    ) -> None:
        self.pool = pool
        self.weights = weights or ScoringWeights()
        self.cost_model = cost_model or CostModel()
        self._suggested: List[str] = []
        self._custom: List[str] = []

    @property
    def suggested_route(self) -> List[str]:
        return list(self._suggested)

    @property
    def custom_route(self) -> List[str]:
        return list(self._custom)

    def compute_suggested(self, selected_ids: Sequence[str]) -> List[str]:
        return compute_suggested(self.pool.orders_for(selected_ids), self.weights)

    def recompute(self, selected_ids: Sequence[str]) -> None:
        """Rebuild both routes; any manual ordering is discarded."""
        self._suggested = self.compute_suggested(selected_ids)
        self._custom = seed_custom(self._suggested)
        logger.info("Recomputed routes for %d selected orders", len(self._suggested))

    def clear(self) -> None:
        self._suggested = []
        self._custom = []

    def move_up(self, order_id: str) -> None:
        move_up(self._custom, order_id)

    def move_down(self, order_id: str) -> None:
        move_down(self._custom, order_id)

    def route(self, use_suggested: bool) -> List[str]:
        return self.suggested_route if use_suggested else self.custom_route

    def metrics(self, route: Sequence[str]) -> RouteMetrics:
        return route_metrics(self.pool.orders_for(route), self.cost_model)

    def summary(self, route: Sequence[str]) -> RouteSummary:
        return summarize(self.pool.orders_for(route), self.weights, self.cost_model)
