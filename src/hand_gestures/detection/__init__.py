"""Hand landmark model and landmark sources."""
from .landmarks import HandLandmarks, Landmark, LandmarkIndex, as_hand
from .source import LandmarkSource
from .hand_detector import HandDetector, HandDetectorConfig
from .replay import ReplaySource

__all__ = [
    "HandLandmarks",
    "Landmark",
    "LandmarkIndex",
    "as_hand",
    "LandmarkSource",
    "HandDetector",
    "HandDetectorConfig",
    "ReplaySource",
]
