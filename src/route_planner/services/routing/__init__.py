"""Route composition helpers."""

from .composer import (
    RouteComposer,
    compute_suggested,
    estimated_time,
    move_down,
    move_up,
    seed_custom,
    total_distance,
)

__all__ = [
    "RouteComposer",
    "compute_suggested",
    "seed_custom",
    "move_up",
    "move_down",
    "total_distance",
    "estimated_time",
]
