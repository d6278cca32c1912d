"""
Publish/subscribe hub between the gesture pipeline and its consumers.

The pipeline announces per-frame results and state transitions here;
presentation layers subscribe instead of polling pipeline state.

Usage:
    bus = EventBus()
    bus.subscribe(Events.GESTURE_CHANGED, on_change)
    bus.emit(Events.GESTURE_CHANGED, gesture=result, previous=None)
"""

import time
import logging
import threading
from collections import Counter, defaultdict, deque
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


def _callback_name(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


class EventBus:
    """Synchronous event dispatch ordered by listener priority.

    Listener registration is guarded by a lock, so sources running on
    another thread may subscribe while frames are being published.
    A listener that raises is logged and skipped; the rest still run.
    """

    def __init__(self, max_history: int = 100):
        self._listeners: Dict[str, List[tuple]] = defaultdict(list)
        self._lock = threading.Lock()
        self._history = deque(maxlen=max_history)
        self._failures: Counter = Counter()
        self._enabled = True

    def subscribe(self, event_name: str, callback: Callable, priority: int = 0):
        """Register a listener for an event.

        Args:
            event_name: One of the Events names
            callback: Called with the keyword arguments given to emit()
            priority: Higher runs earlier; equal priorities keep subscription order
        """
        with self._lock:
            listeners = self._listeners[event_name]
            listeners.append((priority, callback))
            listeners.sort(key=lambda entry: -entry[0])
        logger.debug("Listener %s subscribed to '%s' (priority=%d)",
                     _callback_name(callback), event_name, priority)

    def unsubscribe(self, event_name: str, callback: Callable):
        with self._lock:
            remaining = [(p, cb) for p, cb in self._listeners.get(event_name, [])
                         if cb is not callback]
            if remaining:
                self._listeners[event_name] = remaining
            else:
                self._listeners.pop(event_name, None)

    def emit(self, event_name: str, **kwargs):
        """Deliver an event to every listener registered for it."""
        if not self._enabled:
            return

        with self._lock:
            listeners = list(self._listeners.get(event_name, ()))

        self._history.append({
            "event": event_name,
            "time": time.time(),
            "data_keys": sorted(kwargs),
            "listeners": len(listeners),
        })

        for _, callback in listeners:
            try:
                callback(**kwargs)
            except Exception as e:
                self._failures[event_name] += 1
                logger.error("Listener %s failed on '%s': %s",
                             _callback_name(callback), event_name, e)

    def clear(self, event_name: Optional[str] = None):
        """Drop listeners for one event, or for all events."""
        with self._lock:
            if event_name is None:
                self._listeners.clear()
            else:
                self._listeners.pop(event_name, None)

    def enable(self, enabled: bool = True):
        self._enabled = enabled

    @property
    def listener_count(self) -> int:
        with self._lock:
            return sum(len(entries) for entries in self._listeners.values())

    def failure_count(self, event_name: Optional[str] = None) -> int:
        """Number of listener exceptions caught, overall or for one event."""
        if event_name is None:
            return sum(self._failures.values())
        return self._failures[event_name]

    def get_history(self, last_n: int = 10) -> list:
        """Most recent emitted events, oldest first."""
        return list(self._history)[-last_n:]


class Events:
    """Event names published by GesturePipeline."""

    FRAME_PROCESSED = "frame_processed"    # result=FrameResult
    HAND_DETECTED = "hand_detected"        # hand_count=int
    HAND_LOST = "hand_lost"
    GESTURE_CHANGED = "gesture_changed"    # gesture=GestureResult|None, previous=...
