"""Domain models for delivery orders and planning session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class OrderStatus(str, Enum):
    AVAILABLE = "available"
    SELECTED = "selected"
    IN_PROGRESS = "in-progress"
    DELIVERED = "delivered"


class TrackerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"


class SessionView(str, Enum):
    """Screens of one planning cycle, in the order they are visited."""

    SELECTION = "selection"
    ROUTE = "route"
    DELIVERY = "delivery"


@dataclass(slots=True)
class Order:
    """A pending delivery offered to the driver.

    ``wait_time`` is in minutes and ``distance`` in miles from the restaurant.
    """

    id: str
    address: str
    customer_name: str
    customer_phone: str
    wait_time: float
    distance: float
    order_items: List[str] = field(default_factory=list)
    estimated_time: str = ""
    status: OrderStatus = OrderStatus.AVAILABLE
