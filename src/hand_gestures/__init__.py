"""
Hand Gesture Recognition
=========================

Rule-based classification of hand poses from 21-point hand landmarks.

Modules:
    - core: Domain types, events and the per-frame pipeline
    - detection: Landmark model and landmark sources (MediaPipe, replay)
    - recognition: Gesture classification and optional smoothing
    - utils: Configuration and logging
"""

from .core.exceptions import HandGestureError, InvalidHandError
from .core.pipeline import GesturePipeline
from .core.types import FrameResult, GestureLabel, GestureResult
from .detection.landmarks import HandLandmarks, Landmark, LandmarkIndex
from .recognition.gesture_classifier import GestureClassifier, classify

__version__ = "1.0.0"

__all__ = [
    "classify",
    "GestureClassifier",
    "GestureLabel",
    "GestureResult",
    "FrameResult",
    "GesturePipeline",
    "HandLandmarks",
    "Landmark",
    "LandmarkIndex",
    "HandGestureError",
    "InvalidHandError",
]
