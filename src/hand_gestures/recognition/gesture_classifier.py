"""
Static Gesture Classifier
==========================

Rule-based gesture recognition using hand landmark geometry.
Each frame is classified on its own; no state is carried between calls.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.types import GestureLabel, GestureResult
from ..detection.landmarks import HandLandmarks, LandmarkIndex, as_hand

logger = logging.getLogger(__name__)


# (tip, pip) pairs for the four non-thumb fingers
FINGER_JOINTS = {
    "index": (LandmarkIndex.INDEX_TIP, LandmarkIndex.INDEX_PIP),
    "middle": (LandmarkIndex.MIDDLE_TIP, LandmarkIndex.MIDDLE_PIP),
    "ring": (LandmarkIndex.RING_TIP, LandmarkIndex.RING_PIP),
    "pinky": (LandmarkIndex.PINKY_TIP, LandmarkIndex.PINKY_PIP),
}

# Fixed confidence per matched rule
CONFIDENCES = {
    GestureLabel.THUMBS_UP: 0.90,
    GestureLabel.FIST: 0.95,
    GestureLabel.OPEN_HAND: 0.90,
    GestureLabel.PEACE_SIGN: 0.85,
    GestureLabel.POINTING: 0.85,
    GestureLabel.UNKNOWN: 0.50,
}


@dataclass(frozen=True)
class FingerStates:
    """Extended/curled state of every finger for one hand."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    @property
    def extended_count(self) -> int:
        """Number of extended non-thumb fingers."""
        return sum((self.index, self.middle, self.ring, self.pinky))

    def as_dict(self) -> dict:
        return {
            "thumb": self.thumb,
            "index": self.index,
            "middle": self.middle,
            "ring": self.ring,
            "pinky": self.pinky,
        }


@dataclass
class GestureClassifierConfig:
    """Gesture classifier configuration."""
    # Log finger states for every classified hand
    debug: bool = False

    @classmethod
    def from_dict(cls, config: dict) -> "GestureClassifierConfig":
        """Create config from dictionary."""
        return cls(debug=bool(config.get("debug", False)))


def finger_states(hand: HandLandmarks) -> FingerStates:
    """
    Determine which fingers are extended.

    A finger is extended when its tip sits above its PIP joint
    (smaller y is higher in the image). The thumb is extended when its
    tip lies left of its MCP joint, which only holds for a right hand
    facing a mirrored camera; other orientations are not handled.
    """
    states = {}
    for finger, (tip_idx, pip_idx) in FINGER_JOINTS.items():
        states[finger] = hand.get(tip_idx).y < hand.get(pip_idx).y

    thumb_tip = hand.get(LandmarkIndex.THUMB_TIP)
    thumb_mcp = hand.get(LandmarkIndex.THUMB_MCP)
    states["thumb"] = thumb_tip.x < thumb_mcp.x

    return FingerStates(**states)


def match_gesture(fingers: FingerStates) -> GestureLabel:
    """Apply the ordered gesture rules; first match wins."""
    count = fingers.extended_count

    if fingers.thumb and count == 0:
        return GestureLabel.THUMBS_UP
    if count == 0 and not fingers.thumb:
        return GestureLabel.FIST
    if count == 4 and fingers.thumb:
        return GestureLabel.OPEN_HAND
    if fingers.index and fingers.middle and count == 2:
        return GestureLabel.PEACE_SIGN
    if fingers.index and count == 1:
        return GestureLabel.POINTING
    return GestureLabel.UNKNOWN


class GestureClassifier:
    """
    Rule-based static gesture classifier.

    Maps one hand's 21 landmarks to a gesture label with a fixed
    confidence. Stateless and safe to share between callers.

    Example:
        >>> classifier = GestureClassifier()
        >>> result = classifier.classify(hand_landmarks)
        >>> if result.is_displayable:
        ...     print(f"Detected: {result.label} ({result.confidence:.0%})")
    """

    def __init__(self, config: Optional[GestureClassifierConfig] = None):
        self.config = config or GestureClassifierConfig()

    def classify(self, hand: Any) -> GestureResult:
        """
        Classify hand gesture from landmarks.

        Args:
            hand: HandLandmarks or a sequence of 21 landmark-like points

        Returns:
            Recognized gesture with its rule confidence

        Raises:
            InvalidHandError: if the hand is not 21 usable landmarks
        """
        hand = as_hand(hand)
        fingers = finger_states(hand)
        label = match_gesture(fingers)

        if self.config.debug:
            logger.debug("Finger states: %s -> %s", fingers.as_dict(), label.value)

        return GestureResult(label, CONFIDENCES[label])


_default_classifier = GestureClassifier()


def classify(hand: Any) -> GestureResult:
    """Classify one hand with the default classifier."""
    return _default_classifier.classify(hand)
