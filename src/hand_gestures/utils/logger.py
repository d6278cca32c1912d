"""
Logging setup and gesture event logging.
"""

import time
import logging
import logging.handlers
from collections import deque
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = "%(asctime)s  %(levelname)-5s  %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)-32s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Third-party loggers that flood the console at INFO during model start-up.
NOISY_LOGGERS = ("absl", "urllib3", "matplotlib")


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """
    Route application logs to the console and, optionally, a rotating file.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output. The file always records DEBUG; the console follows
    ``level``.

    Returns:
        The configured root logger
    """
    console_level = logging.getLevelName(str(level).upper())
    if not isinstance(console_level, int):
        console_level = logging.INFO

    root = logging.getLogger()
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(console)
    root.setLevel(console_level)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=int(max_size_mb * 1024 * 1024),
            backupCount=backup_count,
        )
        rotating.setLevel(logging.DEBUG)
        rotating.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(rotating)
        root.setLevel(min(console_level, logging.DEBUG))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(console_level, logging.WARNING))

    return root


class GestureLogger:
    """Records every change of the published gesture."""

    def __init__(self, max_history: int = 500):
        self.logger = logging.getLogger("gesture_events")
        self._changes = deque(maxlen=max_history)
        self._total = 0

    def log_gesture(self, gesture_name: Optional[str], confidence: float,
                    hand_count: int, frame_id: Optional[int] = None):
        self._changes.append({
            "timestamp": time.time(),
            "frame_id": frame_id,
            "gesture": gesture_name,
            "confidence": confidence,
            "hand_count": hand_count,
        })
        self._total += 1
        self.logger.info(
            "Frame %s | Gesture: %-12s | Confidence: %.2f | Hands: %d",
            "-" if frame_id is None else frame_id,
            gesture_name or "none",
            confidence,
            hand_count,
        )

    def get_history(self, last_n=None):
        """Recorded changes, oldest first; ``last_n`` keeps only the newest."""
        changes = list(self._changes)
        return changes[-last_n:] if last_n else changes

    @property
    def total_gestures(self):
        return self._total
