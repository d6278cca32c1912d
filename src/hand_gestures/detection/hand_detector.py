"""
Hand Detection Module - MediaPipe Tasks API
============================================

Wraps the MediaPipe HandLandmarker as a LandmarkSource. Images must
already be decoded to RGB numpy arrays; capture and decoding live
outside this package.
"""

import logging
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import numpy as np

from ..core.exceptions import DetectorError
from .landmarks import HandLandmarks, Landmark
from .source import LandmarkSource

logger = logging.getLogger(__name__)

# Model download URL
HAND_LANDMARKER_MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
DEFAULT_MODEL_PATH = Path.home() / ".cache" / "hand_gestures" / "hand_landmarker.task"

RUNNING_MODES = ("IMAGE", "VIDEO")


@dataclass
class HandDetectorConfig:
    """Configuration for hand detector."""
    model_path: str = ""
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    min_presence_confidence: float = 0.5
    running_mode: str = "VIDEO"  # IMAGE or VIDEO
    auto_download: bool = True

    @classmethod
    def from_dict(cls, d: dict) -> "HandDetectorConfig":
        """Create config from dictionary."""
        return cls(
            model_path=d.get("model_path", ""),
            max_num_hands=d.get("max_num_hands", 2),
            min_detection_confidence=d.get("min_detection_confidence", 0.5),
            min_tracking_confidence=d.get("min_tracking_confidence", 0.5),
            min_presence_confidence=d.get("min_presence_confidence", 0.5),
            running_mode=str(d.get("running_mode", "VIDEO")).upper(),
            auto_download=d.get("auto_download", True),
        )


def download_model(url: str, save_path: Path) -> None:
    """Download the hand landmarker model if not present."""
    if save_path.exists():
        logger.info("Model already exists at %s", save_path)
        return

    save_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading hand landmarker model to %s...", save_path)
    try:
        urllib.request.urlretrieve(url, save_path)
    except OSError as e:
        if save_path.exists():
            save_path.unlink()
        raise DetectorError(f"Failed to download model from {url}: {e}") from e
    logger.info("Model download complete!")


def convert_result(result) -> List[HandLandmarks]:
    """Convert a HandLandmarkerResult into HandLandmarks, in detector order."""
    hands = []
    handedness_list = getattr(result, "handedness", None) or []
    for i, hand_landmarks in enumerate(getattr(result, "hand_landmarks", None) or []):
        handedness = "Unknown"
        confidence = 0.0
        if i < len(handedness_list) and handedness_list[i]:
            category = handedness_list[i][0]
            handedness = category.category_name or "Unknown"
            confidence = float(category.score)

        landmarks = [
            Landmark(x=float(lm.x), y=float(lm.y), z=float(lm.z or 0.0))
            for lm in hand_landmarks
        ]
        hands.append(HandLandmarks(
            landmarks=landmarks,
            handedness=handedness,
            confidence=confidence,
        ))
    return hands


class HandDetector(LandmarkSource):
    """
    Hand detection wrapper using MediaPipe Tasks API (HandLandmarker).

    Every call to ``detect`` also delivers its hands to the registered
    frame callbacks.

    Example:
        >>> detector = HandDetector(HandDetectorConfig())
        >>> detector.on_results(pipeline.on_results)
        >>> detector.start()
        >>> hands = detector.detect(rgb_image)  # RGB format!
        >>> detector.stop()
    """

    def __init__(self, config: Optional[HandDetectorConfig] = None):
        super().__init__()
        self.config = config or HandDetectorConfig()
        if self.config.running_mode not in RUNNING_MODES:
            raise DetectorError(
                f"running_mode must be one of {RUNNING_MODES}, got {self.config.running_mode!r}")
        self._mp = None
        self._landmarker = None
        self._last_timestamp: Optional[int] = None

    def start(self) -> None:
        """
        Initialize the hand landmarker.

        Raises:
            DetectorError: mediapipe is missing, the model cannot be
                found or downloaded, or the landmarker fails to start
        """
        try:
            import mediapipe as mp
            from mediapipe.tasks import python
            from mediapipe.tasks.python import vision
        except ImportError as e:
            raise DetectorError(
                "mediapipe is not installed; install the 'vision' extra") from e

        model_path = Path(self.config.model_path or DEFAULT_MODEL_PATH)
        if not model_path.exists():
            if not self.config.auto_download:
                raise DetectorError(f"Hand landmarker model not found: {model_path}")
            download_model(HAND_LANDMARKER_MODEL_URL, model_path)

        if self.config.running_mode == "IMAGE":
            running_mode = vision.RunningMode.IMAGE
        else:
            running_mode = vision.RunningMode.VIDEO

        options = vision.HandLandmarkerOptions(
            base_options=python.BaseOptions(model_asset_path=str(model_path)),
            running_mode=running_mode,
            num_hands=self.config.max_num_hands,
            min_hand_detection_confidence=self.config.min_detection_confidence,
            min_hand_presence_confidence=self.config.min_presence_confidence,
            min_tracking_confidence=self.config.min_tracking_confidence,
        )

        try:
            self._landmarker = vision.HandLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as e:
            raise DetectorError(f"Failed to initialize HandLandmarker: {e}") from e

        self._mp = mp
        self._last_timestamp = None
        logger.info("HandLandmarker initialized with model: %s", model_path)
        logger.info("Running mode: %s, Max hands: %d",
                    self.config.running_mode, self.config.max_num_hands)

    def stop(self) -> None:
        """Release resources."""
        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None
            logger.info("HandLandmarker stopped")

    close = stop

    @property
    def is_running(self) -> bool:
        return self._landmarker is not None

    def detect(self, image: np.ndarray, timestamp_ms: Optional[int] = None) -> List[HandLandmarks]:
        """
        Detect hands in the given image and deliver them to callbacks.

        Args:
            image: RGB image as numpy array (H, W, 3)
            timestamp_ms: Timestamp in milliseconds (VIDEO mode only)

        Returns:
            List of HandLandmarks for each detected hand
        """
        if self._landmarker is None:
            raise DetectorError("HandLandmarker not initialized. Call start() first.")

        mp_image = self._mp.Image(image_format=self._mp.ImageFormat.SRGB, data=image)

        if self.config.running_mode == "IMAGE":
            result = self._landmarker.detect(mp_image)
        else:
            # VIDEO mode requires strictly increasing timestamps
            if timestamp_ms is None:
                timestamp_ms = (self._last_timestamp or 0) + 33  # ~30 FPS
            elif self._last_timestamp is not None and timestamp_ms <= self._last_timestamp:
                raise DetectorError(
                    f"timestamp {timestamp_ms} ms is not after the previous frame "
                    f"({self._last_timestamp} ms)")
            try:
                result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
            except ValueError as e:
                raise DetectorError(f"HandLandmarker rejected frame at {timestamp_ms} ms: {e}") from e
            self._last_timestamp = timestamp_ms

        hands = convert_result(result)
        self.deliver(hands)
        return hands

    def __enter__(self):
        self.start()
        return self
