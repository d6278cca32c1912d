"""
Hand Landmark Types
====================

The 21-point hand topology shared by every landmark source and by the
gesture classifier, plus validation of loosely-typed landmark input.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, List, NamedTuple, Tuple

import numpy as np

from ..core.exceptions import InvalidHandError

NUM_LANDMARKS = 21


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


class Landmark(NamedTuple):
    """A single landmark point with normalized coordinates."""
    x: float  # 0.0 to 1.0, normalized by image width
    y: float  # 0.0 to 1.0, normalized by image height
    z: float = 0.0  # Depth relative to wrist

    def to_pixel(self, width: int, height: int) -> Tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return (int(self.x * width), int(self.y * height))


@dataclass
class HandLandmarks:
    """One detected hand in one frame, with utility methods."""
    landmarks: List[Landmark]
    handedness: str = "Unknown"  # "Left", "Right" or "Unknown"
    confidence: float = 0.0

    def __len__(self) -> int:
        return len(self.landmarks)

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def get(self, index: LandmarkIndex) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def palm_center(self) -> Tuple[float, float]:
        """Calculate palm center from wrist and finger MCPs."""
        points = [self.get(i) for i in (
            LandmarkIndex.WRIST, LandmarkIndex.INDEX_MCP, LandmarkIndex.MIDDLE_MCP,
            LandmarkIndex.RING_MCP, LandmarkIndex.PINKY_MCP,
        )]
        center_x = sum(p.x for p in points) / len(points)
        center_y = sum(p.y for p in points) / len(points)
        return (center_x, center_y)

    def to_numpy(self) -> np.ndarray:
        """Convert landmarks to numpy array of shape (21, 3)."""
        return np.array([[lm.x, lm.y, lm.z] for lm in self.landmarks], dtype=np.float64)


def to_landmark(item: Any, index: int) -> Landmark:
    """Read x/y(/z) from a Landmark, mapping, attribute object or tuple."""
    try:
        if isinstance(item, Landmark):
            x, y, z = item
        elif isinstance(item, Mapping):
            x, y, z = item["x"], item["y"], item.get("z", 0.0)
        elif hasattr(item, "x") and hasattr(item, "y"):
            x, y, z = item.x, item.y, getattr(item, "z", 0.0)
        elif isinstance(item, Sequence) and not isinstance(item, (str, bytes)) and len(item) >= 2:
            x, y = item[0], item[1]
            z = item[2] if len(item) > 2 else 0.0
        else:
            raise InvalidHandError(
                f"landmark {index}: unsupported type {type(item).__name__}")
        x, y = float(x), float(y)
        z = 0.0 if z is None else float(z)
    except InvalidHandError:
        raise
    except KeyError as e:
        raise InvalidHandError(f"landmark {index}: missing coordinate {e}") from e
    except (TypeError, ValueError) as e:
        raise InvalidHandError(f"landmark {index}: {e}") from e

    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidHandError(f"landmark {index}: non-finite coordinates ({x}, {y})")
    return Landmark(x=x, y=y, z=z)


def as_hand(hand: Any) -> HandLandmarks:
    """
    Validate and normalize one hand's landmarks.

    Accepts a HandLandmarks object, a (21, 2|3) array, or any sequence
    of 21 landmark-like items (Landmark, MediaPipe NormalizedLandmark,
    {"x", "y"} mapping or (x, y[, z]) tuple).

    Raises:
        InvalidHandError: wrong landmark count or unusable coordinates
    """
    if isinstance(hand, HandLandmarks):
        points = hand.landmarks
        handedness, confidence = hand.handedness, hand.confidence
    elif isinstance(hand, np.ndarray):
        if hand.ndim != 2 or hand.shape[1] < 2:
            raise InvalidHandError(
                f"expected an array of shape ({NUM_LANDMARKS}, 2|3), got {hand.shape}")
        points = hand.tolist()
        handedness, confidence = "Unknown", 0.0
    elif isinstance(hand, Sequence) and not isinstance(hand, (str, bytes)):
        points = hand
        handedness, confidence = "Unknown", 0.0
    else:
        raise InvalidHandError(
            f"expected a sequence of {NUM_LANDMARKS} landmarks, got {type(hand).__name__}")

    if len(points) != NUM_LANDMARKS:
        raise InvalidHandError(
            f"expected {NUM_LANDMARKS} landmarks, got {len(points)}")

    landmarks = [to_landmark(item, i) for i, item in enumerate(points)]
    return HandLandmarks(landmarks=landmarks, handedness=handedness,
                         confidence=confidence)
