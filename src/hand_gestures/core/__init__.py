"""Domain types, exceptions and events shared across modules."""
from .events import EventBus, Events
from .exceptions import (
    HandGestureError,
    InvalidHandError,
    RecordingFormatError,
    DetectorError,
    ConfigError,
)
from .types import GestureLabel, GestureResult, FrameResult

__all__ = [
    "EventBus",
    "Events",
    "HandGestureError",
    "InvalidHandError",
    "RecordingFormatError",
    "DetectorError",
    "ConfigError",
    "GestureLabel",
    "GestureResult",
    "FrameResult",
]
