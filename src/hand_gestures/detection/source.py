"""
Landmark Source
================

Abstract producer of per-frame hand landmarks. The gesture pipeline only
depends on this interface, never on a concrete detector or camera.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List

from .landmarks import HandLandmarks

logger = logging.getLogger(__name__)

FrameCallback = Callable[[List[HandLandmarks]], Any]


class LandmarkSource(ABC):
    """
    Base class for anything that delivers hand landmarks frame by frame.

    Subclasses call ``deliver(hands)`` once per processed frame, with an
    empty list when no hand is visible. Callbacks run synchronously and
    in registration order, so frames never overlap.

    Example:
        >>> source = ReplaySource.from_file("recording.json")
        >>> source.on_results(pipeline.on_results)
        >>> source.run()
    """

    def __init__(self):
        self._callbacks: List[FrameCallback] = []

    def on_results(self, callback: FrameCallback) -> None:
        """Register a callback receiving each frame's list of hands."""
        self._callbacks.append(callback)

    def deliver(self, hands: List[HandLandmarks]) -> None:
        """Hand one frame's detections to every registered callback."""
        for callback in self._callbacks:
            callback(hands)

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by the source."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
