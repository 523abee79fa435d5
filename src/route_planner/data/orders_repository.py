"""Data access helpers for loading the seed orders offered to a driver."""

from __future__ import annotations

import functools
import json
import re
from pathlib import Path
from typing import Any, Optional

from ..config import settings
from ..models.domain import Order

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def _coerce_float(value: Any, field_name: str) -> float:
    """Accept numbers or display strings such as ``"15 min"`` / ``"2.1 mi"``."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        match = _NUMBER.search(value.replace(",", ""))
        if match:
            return float(match.group())
    raise ValueError(f"Unable to parse {field_name} from value '{value}'")


def _pick(record: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def order_from_record(record: dict) -> Order:
    order_id = str(_pick(record, "id", "order_id", "orderId", default="")).strip()
    if not order_id:
        raise ValueError(f"Order record is missing an id: {record}")
    wait_time = _coerce_float(_pick(record, "waitTime", "wait_time"), "wait time")
    distance = _coerce_float(_pick(record, "distance", "distance_miles"), "distance")
    if wait_time < 0 or distance < 0:
        raise ValueError(f"Order '{order_id}' has a negative wait time or distance.")
    items = _pick(record, "orderItems", "order_items", "items", default=[])
    return Order(
        id=order_id,
        address=str(_pick(record, "address", default="")).strip(),
        customer_name=str(_pick(record, "customerName", "customer_name", default="")).strip(),
        customer_phone=str(_pick(record, "customerPhone", "customer_phone", default="")).strip(),
        wait_time=wait_time,
        distance=distance,
        order_items=[str(item) for item in items],
        estimated_time=str(_pick(record, "estimatedTime", "estimated_time", default="")),
    )


@functools.lru_cache(maxsize=1)
def load_orders(source: Optional[Path] = None) -> tuple[Order, ...]:
    """Load orders from the configured JSON file.

    The file holds either a list of order records or ``{"orders": [...]}``.
    Returned orders are templates; copy them before handing them to a session.
    """
    json_path = source or settings.orders_file
    if not json_path.exists():
        raise FileNotFoundError(f"Orders file not found: {json_path}")

    with json_path.open(mode="r", encoding="utf-8") as handle:
        payload = json.load(handle)
    records = payload.get("orders", []) if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise ValueError(f"Orders file '{json_path}' must contain a list of orders.")

    orders = tuple(order_from_record(record) for record in records)
    seen: set[str] = set()
    for order in orders:
        if order.id in seen:
            raise ValueError(f"Duplicate order id '{order.id}' in {json_path}")
        seen.add(order.id)
    return orders
