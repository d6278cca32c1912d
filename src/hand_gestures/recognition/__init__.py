"""Gesture recognition module."""
from .gesture_classifier import GestureClassifier, GestureClassifierConfig, FingerStates, classify
from .gesture_buffer import GestureBuffer, GestureBufferConfig

__all__ = [
    "GestureClassifier",
    "GestureClassifierConfig",
    "FingerStates",
    "classify",
    "GestureBuffer",
    "GestureBufferConfig",
]
