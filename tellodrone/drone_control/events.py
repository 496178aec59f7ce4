"""Mini README: Per-connection event dispatch.

Structure:
    * DEFAULT_EVENTS - event names a Tello connection emits.
    * EventDispatcher - ordered callback lists keyed by event name.

Each connection owns its own dispatcher so several drones can be driven from
one process without sharing callback state. Callbacks run synchronously, in
attachment order, on whichever thread fires the event (normally a socket
listener thread).
"""

from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, List, Tuple

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_EVENTS: Tuple[str, ...] = ("connection", "state", "send", "message", "_ok")

Callback = Callable[..., object]


class EventDispatcher:
    """Attach callbacks to named events and fire them in attachment order."""

    def __init__(self, events: Iterable[str] = DEFAULT_EVENTS) -> None:
        self._callbacks: Dict[str, List[Tuple[Callback, bool]]] = {event: [] for event in events}
        self._lock = threading.Lock()

    @property
    def events(self) -> Tuple[str, ...]:
        return tuple(self._callbacks)

    def _check_event(self, event: str) -> None:
        if event not in self._callbacks:
            raise ValueError(f"Invalid event: {event!r}")

    def attach(self, event: str, callback: Callback, *, once: bool = False) -> None:
        """Register ``callback`` for ``event``; ``once`` removes it after it first runs."""

        self._check_event(event)
        if not callable(callback):
            raise TypeError(f"Callback for {event!r} must be callable, received {callback!r}")
        with self._lock:
            self._callbacks[event].append((callback, once))

    def detach(self, event: str, callback: Callback) -> bool:
        """Remove the first registration of ``callback``; return whether one was found."""

        self._check_event(event)
        with self._lock:
            entries = self._callbacks[event]
            for index, (registered, _) in enumerate(entries):
                if registered is callback:
                    del entries[index]
                    return True
        return False

    def listener_count(self, event: str) -> int:
        self._check_event(event)
        return len(self._callbacks[event])

    def fire(self, event: str, *args: object) -> None:
        """Run every callback attached to ``event`` with ``args``."""

        self._check_event(event)
        with self._lock:
            entries = list(self._callbacks[event])
            self._callbacks[event] = [entry for entry in entries if not entry[1]]

        LOGGER.debug("Firing %r to %s callbacks", event, len(entries))
        for callback, _ in entries:
            callback(*args)
