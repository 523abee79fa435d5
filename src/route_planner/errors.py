"""Errors raised by the route planning engine."""

from __future__ import annotations


class RoutePlannerError(Exception):
    """Base class for every error the engine reports to its caller."""


class InvalidTransition(RoutePlannerError):
    """Raised when an operation is illegal in the current state."""


class NotFound(InvalidTransition):
    """Raised when a referenced order id is absent from the pool or route."""

    def __init__(self, order_id: str, where: str = "pool") -> None:
        super().__init__(f"Order '{order_id}' not found in {where}.")
        self.order_id = order_id


class InvariantViolation(RoutePlannerError):
    """Raised when route contents diverge from the selection set.

    Only reachable if state is mutated outside the documented operations.
    """


class SessionNotFound(RoutePlannerError):
    """Raised when no session has been opened for a driver id."""

    def __init__(self, driver_id: str) -> None:
        super().__init__(f"No session is open for driver '{driver_id}'.")
        self.driver_id = driver_id
