"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(slots=True)
class RouteStop:
    order_id: str
    sequence: int
    score: float
    distance_miles: float
    eta_min: float
    address: str
    customer_name: str


@dataclass(slots=True)
class RouteMetrics:
    stop_count: int
    total_distance_miles: float
    estimated_time_min: float


@dataclass(slots=True)
class RouteSummary:
    stops: List[RouteStop]
    metrics: RouteMetrics
