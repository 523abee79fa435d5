"""Route planning and delivery request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class RouteStopModel(BaseModel):
    order_id: str
    sequence: int
    score: float
    distance_miles: float
    eta_min: float
    address: str
    customer_name: str


class RouteMetricsModel(BaseModel):
    stop_count: int
    total_distance_miles: float
    estimated_time_min: float


class RouteResponse(BaseModel):
    current_view: str
    suggested_route: List[str]
    custom_route: List[str]
    using_suggested_route: bool
    metrics: RouteMetricsModel
    stops: List[RouteStopModel]


class MoveStopRequest(BaseModel):
    order_id: str
    direction: Literal["up", "down"]


class RouteWeightsRequest(BaseModel):
    wait_time_weight: float = Field(..., ge=0)
    distance_weight: float = Field(..., ge=0)


class StartDeliveryRequest(BaseModel):
    use_suggested: bool = Field(
        default=True,
        description="Execute the suggested route when True, the driver's custom route otherwise.",
    )


class CompleteDeliveryRequest(BaseModel):
    order_id: str


class DeliveryStatusResponse(BaseModel):
    state: str
    active_order_id: Optional[str] = None
    route: List[str]
    delivered: int
    total: int
