"""
Hand Gesture Recognition - Command Line Entry Point
=====================================================

Runs recorded landmark frames or a still image through the gesture
pipeline and prints the published results.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core.exceptions import HandGestureError
from .core.pipeline import GesturePipeline
from .core.types import FrameResult, GestureLabel
from .detection.hand_detector import HandDetector
from .detection.landmarks import Landmark
from .detection.replay import ReplaySource
from .recognition.gesture_buffer import GestureBuffer
from .recognition.gesture_classifier import GestureClassifier
from .utils.config import AppConfig, create_app_config, load_config
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def build_pipeline(config: AppConfig) -> GesturePipeline:
    """Wire classifier and optional smoothing from configuration."""
    buffer = GestureBuffer(config.smoothing) if config.smoothing.enabled else None
    return GesturePipeline(
        classifier=GestureClassifier(config.recognition),
        gesture_buffer=buffer,
    )


def format_frame(result: FrameResult) -> str:
    """One printable line per published frame."""
    if result.gesture is None:
        gesture, confidence = "-", "-"
    else:
        gesture, confidence = result.gesture.label, f"{result.gesture.confidence:.2f}"
    return (f"frame={result.frame_id:<5d} hands={result.hand_count}  "
            f"gesture={gesture:<12s} confidence={confidence}")


def run_replay(config: AppConfig, path: str) -> int:
    """Replay a landmark recording through the pipeline."""
    pipeline = build_pipeline(config)
    with ReplaySource.from_file(path) as source:
        source.on_results(lambda hands: print(format_frame(pipeline.on_results(hands))))
        frames = source.run()
    logger.info("Replayed %d frames (%d rejected hands)", frames, pipeline.rejected_count)
    return 0


def run_image(config: AppConfig, path: str) -> int:
    """Detect and classify hands in a single image file."""
    try:
        import cv2
    except ImportError as e:
        raise HandGestureError("opencv-python is not installed; install the 'vision' extra") from e

    image = cv2.imread(path)
    if image is None:
        raise HandGestureError(f"Could not read image: {path}")
    rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

    config.detector.running_mode = "IMAGE"
    pipeline = build_pipeline(config)
    with HandDetector(config.detector) as detector:
        pipeline.attach(detector)
        hands = detector.detect(rgb)

    result = pipeline.latest
    print(f"hands: {result.hand_count}")
    if hands:
        height, width = rgb.shape[:2]
        palm_x, palm_y = hands[0].palm_center
        print("palm: (%d, %d) px" % Landmark(palm_x, palm_y).to_pixel(width, height))
    if result.gesture is not None:
        print(f"gesture: {result.gesture.label} ({result.gesture.confidence:.2f})")
    return 0


def list_gestures() -> int:
    for label in GestureLabel.supported():
        print(label.value)
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hand-gestures",
        description="Rule-based hand gesture recognition",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hand-gestures replay recordings/peace.json
  hand-gestures image photo.jpg
  hand-gestures --config custom_config.yaml replay frames.yaml
        """
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to configuration file (default: config/config.yaml)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this rotating file"
    )

    commands = parser.add_subparsers(dest="command", required=True)
    replay = commands.add_parser("replay", help="Replay recorded landmark frames")
    replay.add_argument("file", help="Recording in JSON or YAML")
    image = commands.add_parser("image", help="Classify the hand in a still image")
    image.add_argument("file", help="Image file readable by OpenCV")
    commands.add_parser("gestures", help="List supported gestures")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = create_app_config(load_config(args.config))
    except HandGestureError as e:
        setup_logging("INFO")
        logger.error("%s", e)
        return 1

    setup_logging(
        level="DEBUG" if args.debug else config.logging.level,
        log_file=args.log_file or config.logging.file,
        max_size_mb=config.logging.max_size_mb,
        backup_count=config.logging.backup_count,
    )
    if args.debug:
        config.recognition.debug = True

    try:
        if args.command == "replay":
            return run_replay(config, args.file)
        if args.command == "image":
            return run_image(config, args.file)
        return list_gestures()
    except HandGestureError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
