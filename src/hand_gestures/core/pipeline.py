"""
Per-frame orchestration for the gesture recognition system.

A LandmarkSource delivers each frame's hands to ``GesturePipeline.on_results``.
The pipeline classifies the first hand only, overwrites the published
FrameResult and notifies subscribers through the event bus.

Architecture:
    LandmarkSource -> GesturePipeline -> GestureClassifier
    -> [GestureBuffer] -> FrameResult -> EventBus -> presentation
"""

import logging
from typing import List, Optional

from .events import EventBus, Events
from .exceptions import InvalidHandError
from .types import FrameResult, GestureResult
from ..detection.landmarks import HandLandmarks
from ..detection.source import LandmarkSource
from ..recognition.gesture_buffer import GestureBuffer
from ..recognition.gesture_classifier import GestureClassifier
from ..utils.logger import GestureLogger

logger = logging.getLogger(__name__)


class GesturePipeline:
    """Frame-driven gesture recognition pipeline.

    Holds only the latest published frame; nothing from earlier frames
    feeds into classification unless a GestureBuffer is supplied.

    Example:
        >>> pipeline = GesturePipeline()
        >>> pipeline.attach(ReplaySource.from_file("recording.json"))
        >>> pipeline.bus.subscribe(Events.GESTURE_CHANGED, on_change)
    """

    def __init__(
        self,
        classifier: Optional[GestureClassifier] = None,
        event_bus: Optional[EventBus] = None,
        gesture_buffer: Optional[GestureBuffer] = None,
        gesture_logger: Optional[GestureLogger] = None,
    ):
        self._classifier = classifier or GestureClassifier()
        self._bus = event_bus or EventBus()
        self._buffer = gesture_buffer
        self._gesture_logger = gesture_logger or GestureLogger()

        # State
        self._frame_count = 0
        self._rejected_count = 0
        self._latest = FrameResult(frame_id=0)

    def attach(self, source: LandmarkSource) -> None:
        """Subscribe this pipeline to a landmark source."""
        source.on_results(self.on_results)
        logger.debug("Pipeline attached to %s", type(source).__name__)

    def on_results(self, hands: Optional[List[HandLandmarks]]) -> FrameResult:
        """Process one frame's detections.

        Args:
            hands: Detected hands in detector order; None or empty when
                no hand is visible

        Returns:
            The FrameResult now published as the latest state
        """
        hands = hands or []
        self._frame_count += 1

        gesture: Optional[GestureResult] = None
        if hands:
            try:
                gesture = self._classifier.classify(hands[0])
            except InvalidHandError as e:
                self._rejected_count += 1
                logger.warning("Frame %d: primary hand rejected: %s", self._frame_count, e)

        if self._buffer is not None:
            gesture = self._buffer.update(gesture)
            if not hands:
                # Votes still age out, but an empty frame never shows a gesture
                gesture = None

        result = FrameResult(
            frame_id=self._frame_count,
            hand_count=len(hands),
            gesture=gesture,
        )

        previous = self._latest
        self._latest = result
        self._publish(result, previous)
        return result

    def _publish(self, result: FrameResult, previous: FrameResult) -> None:
        """Emit frame, presence and gesture-change events."""
        if result.hand_detected and not previous.hand_detected:
            self._bus.emit(Events.HAND_DETECTED, hand_count=result.hand_count)
        elif previous.hand_detected and not result.hand_detected:
            self._bus.emit(Events.HAND_LOST)

        prev_label = previous.gesture.name if previous.gesture else None
        new_label = result.gesture.name if result.gesture else None
        if new_label is not prev_label:
            self._gesture_logger.log_gesture(
                result.gesture.label if result.gesture else None,
                result.gesture.confidence if result.gesture else 0.0,
                result.hand_count,
                frame_id=result.frame_id,
            )
            self._bus.emit(Events.GESTURE_CHANGED,
                           gesture=result.gesture, previous=previous.gesture)

        self._bus.emit(Events.FRAME_PROCESSED, result=result)

    def reset(self) -> None:
        """Forget the published state and any buffered votes."""
        self._frame_count = 0
        self._rejected_count = 0
        self._latest = FrameResult(frame_id=0)
        if self._buffer is not None:
            self._buffer.reset()

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def latest(self) -> FrameResult:
        return self._latest

    @property
    def hand_count(self) -> int:
        return self._latest.hand_count

    @property
    def gesture(self) -> Optional[GestureResult]:
        return self._latest.gesture

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def rejected_count(self) -> int:
        return self._rejected_count
