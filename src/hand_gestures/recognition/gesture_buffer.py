"""
Gesture Buffer
===============

Optional multi-frame consensus voting that steadies the published gesture.
The classifier itself stays frame-independent; this runs after it.
"""

import logging
from collections import deque, Counter
from dataclasses import dataclass
from typing import Optional, List, Dict, Deque

from ..core.types import GestureLabel, GestureResult

logger = logging.getLogger(__name__)


@dataclass
class GestureBufferConfig:
    """Gesture buffer configuration."""
    enabled: bool = False
    buffer_size: int = 5     # Number of frames for consensus
    min_consensus: int = 3   # Minimum votes required

    def __post_init__(self):
        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be >= 1, got {self.buffer_size}")
        if not 1 <= self.min_consensus <= self.buffer_size:
            raise ValueError(
                f"min_consensus must be in [1, {self.buffer_size}], got {self.min_consensus}")

    @classmethod
    def from_dict(cls, config: dict) -> "GestureBufferConfig":
        """Create config from dictionary."""
        return cls(
            enabled=config.get("enabled", False),
            buffer_size=config.get("buffer_size", 5),
            min_consensus=config.get("min_consensus", 3),
        )


class GestureBuffer:
    """
    Sliding-window majority vote over recent classifier outputs.

    Frames without a hand are recorded as None and count against every
    gesture, so the buffered output clears shortly after the hand leaves.

    Example:
        >>> buffer = GestureBuffer(GestureBufferConfig(enabled=True))
        >>>
        >>> while running:
        ...     raw = classifier.classify(hand)
        ...     steady = buffer.update(raw)  # None until consensus
    """

    def __init__(self, config: Optional[GestureBufferConfig] = None):
        self.config = config or GestureBufferConfig()
        self._buffer: Deque[Optional[GestureResult]] = deque(maxlen=self.config.buffer_size)
        self._last_confirmed: Optional[GestureLabel] = None

    def update(self, result: Optional[GestureResult]) -> Optional[GestureResult]:
        """
        Add a frame's result to the buffer and check for consensus.

        Args:
            result: Raw classifier output, or None for a frame with no hand

        Returns:
            The majority gesture if it has enough votes, else None
        """
        self._buffer.append(result)
        confirmed = self._check_consensus()

        label = confirmed.name if confirmed else None
        if label is not self._last_confirmed:
            logger.debug("Buffered gesture: %s -> %s",
                         self._last_confirmed.value if self._last_confirmed else None,
                         label.value if label else None)
            self._last_confirmed = label

        return confirmed

    def _check_consensus(self) -> Optional[GestureResult]:
        """Return the gesture with majority votes if threshold met."""
        type_counts: Counter = Counter()
        best_by_type: Dict[GestureLabel, GestureResult] = {}

        for result in self._buffer:
            if result is None:
                continue
            type_counts[result.name] += 1
            # Keep highest confidence instance
            best = best_by_type.get(result.name)
            if best is None or result.confidence > best.confidence:
                best_by_type[result.name] = result

        if not type_counts:
            return None

        most_common_type, count = type_counts.most_common(1)[0]
        if count >= self.config.min_consensus:
            return best_by_type[most_common_type]
        return None

    def reset(self) -> None:
        """Clear buffer and reset state."""
        self._buffer.clear()
        self._last_confirmed = None

    @property
    def current_gesture(self) -> Optional[GestureResult]:
        """Current consensus without adding a frame."""
        return self._check_consensus()

    @property
    def buffer_contents(self) -> List[Optional[str]]:
        """Buffer contents as gesture names for debugging."""
        return [r.label if r else None for r in self._buffer]
