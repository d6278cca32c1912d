"""
Replay Source
==============

Delivers pre-recorded landmark frames from a JSON or YAML file, so the
pipeline can run without a camera or detector.

Recording layout::

    frames:
      - []                                   # no hand
      - [[[0.5, 0.6, 0.0], ... 21 points]]   # one hand, bare points
      - - handedness: Right
          score: 0.97
          landmarks: [{x: 0.5, y: 0.6}, ...]

A bare top-level list of frames is accepted too, and a frame may be a
mapping with a ``hands`` key.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from ..core.exceptions import InvalidHandError, RecordingFormatError
from .landmarks import HandLandmarks, to_landmark
from .source import LandmarkSource

logger = logging.getLogger(__name__)


def _parse_hand(raw: Any, frame_idx: int, hand_idx: int) -> HandLandmarks:
    where = f"frame {frame_idx}, hand {hand_idx}"
    handedness, score = "Unknown", 0.0
    if isinstance(raw, Mapping):
        if "landmarks" not in raw:
            raise RecordingFormatError(f"{where}: missing 'landmarks'")
        handedness = str(raw.get("handedness", "Unknown"))
        try:
            score = float(raw.get("score", 0.0))
        except (TypeError, ValueError) as e:
            raise RecordingFormatError(f"{where}: bad score {raw.get('score')!r}") from e
        raw = raw["landmarks"]
    if not isinstance(raw, list):
        raise RecordingFormatError(f"{where}: landmarks must be a list")

    try:
        landmarks = [to_landmark(point, i) for i, point in enumerate(raw)]
    except InvalidHandError as e:
        raise RecordingFormatError(f"{where}: {e}") from e

    # Landmark count is checked by the classifier, not here
    return HandLandmarks(landmarks=landmarks, handedness=handedness, confidence=score)


def parse_recording(data: Any) -> List[List[HandLandmarks]]:
    """Turn decoded JSON/YAML into a list of frames of hands."""
    if isinstance(data, Mapping):
        if "frames" not in data:
            raise RecordingFormatError("recording mapping has no 'frames' key")
        data = data["frames"]
    if not isinstance(data, list):
        raise RecordingFormatError("recording must be a list of frames")

    frames = []
    for frame_idx, frame in enumerate(data):
        if frame is None:
            frame = []
        if isinstance(frame, Mapping):
            frame = frame.get("hands") or []
        if not isinstance(frame, list):
            raise RecordingFormatError(f"frame {frame_idx}: expected a list of hands")
        frames.append([_parse_hand(hand, frame_idx, i) for i, hand in enumerate(frame)])
    return frames


def load_recording(path: Union[str, Path]) -> List[List[HandLandmarks]]:
    """Load a recording from a .json, .yaml or .yml file."""
    path = Path(path)
    try:
        with open(path, "r") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise RecordingFormatError(f"{path}: {e}") from e
    except OSError as e:
        raise RecordingFormatError(f"Cannot read recording {path}: {e}") from e

    frames = parse_recording(data)
    logger.info("Loaded %d frames from %s", len(frames), path)
    return frames


class ReplaySource(LandmarkSource):
    """
    LandmarkSource that replays recorded frames in order.

    Example:
        >>> source = ReplaySource.from_file("recordings/peace.yaml")
        >>> source.on_results(pipeline.on_results)
        >>> source.run()
    """

    def __init__(self, frames: List[List[HandLandmarks]]):
        super().__init__()
        self._frames = frames
        self._position = 0

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ReplaySource":
        return cls(load_recording(path))

    def __len__(self) -> int:
        return len(self._frames)

    def step(self) -> Optional[List[HandLandmarks]]:
        """Deliver the next frame; returns None once the recording is exhausted."""
        if self._position >= len(self._frames):
            return None
        hands = self._frames[self._position]
        self._position += 1
        self.deliver(hands)
        return hands

    def run(self) -> int:
        """Deliver all remaining frames. Returns the number delivered."""
        delivered = 0
        while self.step() is not None:
            delivered += 1
        return delivered

    def rewind(self) -> None:
        self._position = 0

    def close(self) -> None:
        self._position = len(self._frames)
