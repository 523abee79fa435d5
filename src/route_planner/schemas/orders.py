"""Order pool API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from ..models.domain import Order, OrderStatus


class OrderModel(BaseModel):
    id: str
    address: str
    customer_name: str
    customer_phone: str
    order_items: List[str]
    estimated_time: str
    wait_time: float
    distance: float
    status: OrderStatus

    @classmethod
    def from_order(cls, order: Order) -> "OrderModel":
        return cls(
            id=order.id,
            address=order.address,
            customer_name=order.customer_name,
            customer_phone=order.customer_phone,
            order_items=list(order.order_items),
            estimated_time=order.estimated_time,
            wait_time=order.wait_time,
            distance=order.distance,
            status=order.status,
        )


class OrderPoolResponse(BaseModel):
    orders: List[OrderModel]
    selected_ids: List[str]
    current_view: str
