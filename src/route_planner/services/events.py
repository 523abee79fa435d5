"""Outbound notifications emitted after a state transition commits."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

SELECTION_CHANGED = "selection_changed"
DELIVERY_START = "delivery_start"
DELIVERY_COMPLETE = "delivery_complete"

SIGNALS = (SELECTION_CHANGED, DELIVERY_START, DELIVERY_COMPLETE)

Listener = Callable[[Any], None]


class EventBus:
    """Fire-and-forget fan-out of engine signals to external collaborators.

    Listener return values are ignored and listener exceptions are logged,
    never raised back into the transition that emitted the signal.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = {signal: [] for signal in SIGNALS}

    def subscribe(self, signal: str, listener: Listener) -> None:
        if signal not in self._listeners:
            raise ValueError(f"Unknown signal '{signal}'.")
        self._listeners[signal].append(listener)

    def unsubscribe(self, signal: str, listener: Listener) -> None:
        listeners = self._listeners.get(signal, [])
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, signal: str, payload: Any) -> None:
        for listener in list(self._listeners.get(signal, [])):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener %r failed while handling %s", listener, signal)
