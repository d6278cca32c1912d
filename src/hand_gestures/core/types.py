"""
Shared domain types for the hand gesture recognition system.

Centralizes the gesture enum and result containers used across modules
to eliminate circular imports and ensure type consistency.
"""

import time
from enum import Enum
from typing import Optional, List


# =============================================================================
# Gesture Labels
# =============================================================================

class GestureLabel(Enum):
    """Closed set of gesture labels produced by the classifier."""
    THUMBS_UP = "Thumbs Up"
    FIST = "Fist"
    OPEN_HAND = "Open Hand"
    PEACE_SIGN = "Peace Sign"
    POINTING = "Pointing"
    UNKNOWN = "Unknown"

    @classmethod
    def from_string(cls, name: str) -> 'GestureLabel':
        """Parse a display name ("Peace Sign") or enum name ("PEACE_SIGN")."""
        try:
            return cls(name)
        except ValueError:
            pass
        key = name.strip().upper().replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        return cls.UNKNOWN

    @classmethod
    def supported(cls) -> List['GestureLabel']:
        """Named gestures in display order (everything except UNKNOWN)."""
        return [label for label in cls if label is not cls.UNKNOWN]

    @property
    def is_named(self) -> bool:
        return self is not GestureLabel.UNKNOWN


# =============================================================================
# Data Containers
# =============================================================================

class GestureResult:
    """Container for gesture classification output."""

    __slots__ = ("name", "confidence")

    def __init__(self, name: GestureLabel, confidence: float):
        self.name = name
        self.confidence = confidence

    def __repr__(self):
        return f"GestureResult({self.name.value}, conf={self.confidence:.2f})"

    def __eq__(self, other):
        if not isinstance(other, GestureResult):
            return NotImplemented
        return self.name is other.name and self.confidence == other.confidence

    def __hash__(self):
        return hash((self.name, self.confidence))

    @property
    def label(self) -> str:
        """Human readable gesture name."""
        return self.name.value

    @property
    def is_displayable(self) -> bool:
        """Presentation layers hide UNKNOWN results."""
        return self.name.is_named

    def to_dict(self) -> dict:
        return {"name": self.name.value, "confidence": self.confidence}


class FrameResult:
    """Snapshot published once per processed frame.

    Replaced wholesale every frame; consumers should never mutate it.
    """

    __slots__ = ("frame_id", "hand_count", "gesture", "timestamp")

    def __init__(self, frame_id: int, hand_count: int = 0,
                 gesture: Optional[GestureResult] = None,
                 timestamp: Optional[float] = None):
        self.frame_id = frame_id
        self.hand_count = hand_count
        self.gesture = gesture
        self.timestamp = time.time() if timestamp is None else timestamp

    def __repr__(self):
        return (f"FrameResult(frame={self.frame_id}, hands={self.hand_count}, "
                f"gesture={self.gesture!r})")

    @property
    def hand_detected(self) -> bool:
        return self.hand_count > 0

    def to_dict(self) -> dict:
        """Convert to the dict format consumed by presentation layers."""
        return {
            "frame_id": self.frame_id,
            "hand_count": self.hand_count,
            "gesture": self.gesture.to_dict() if self.gesture else None,
            "timestamp": self.timestamp,
        }
