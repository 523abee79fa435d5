"""Route group exports."""

from . import delivery, health, orders, routes

__all__ = ["orders", "routes", "delivery", "health"]
