"""
Tests for Gesture Recognition Module
=====================================
"""

import itertools
import logging
from types import SimpleNamespace

import numpy as np
import pytest

from hand_gestures.core.exceptions import InvalidHandError
from hand_gestures.core.types import GestureLabel, GestureResult
from hand_gestures.recognition.gesture_classifier import (
    CONFIDENCES,
    FingerStates,
    GestureClassifier,
    GestureClassifierConfig,
    classify,
    finger_states,
    match_gesture,
)

from helpers import FINGERS, as_points, create_mock_landmarks, hand_with


class TestGestureClassifier:
    """Test suite for static gesture classifier."""

    @pytest.fixture
    def classifier(self):
        """Create classifier with default config."""
        return GestureClassifier(GestureClassifierConfig(debug=True))

    def test_fist(self, classifier):
        """All fingers curled and thumb tucked."""
        result = classifier.classify(hand_with())

        assert result.name is GestureLabel.FIST
        assert result.confidence == 0.95

    def test_thumbs_up(self, classifier):
        """Only the thumb extended."""
        result = classifier.classify(hand_with(thumb=True))

        assert result.name is GestureLabel.THUMBS_UP
        assert result.confidence == 0.90

    def test_open_hand(self, classifier):
        """All five fingers extended."""
        result = classifier.classify(hand_with(*FINGERS, thumb=True))

        assert result.name is GestureLabel.OPEN_HAND
        assert result.confidence == 0.90

    @pytest.mark.parametrize("thumb", [False, True])
    def test_peace_sign_ignores_thumb(self, classifier, thumb):
        """Index and middle up, ring and pinky down, whatever the thumb does."""
        result = classifier.classify(hand_with("index", "middle", thumb=thumb))

        assert result.name is GestureLabel.PEACE_SIGN
        assert result.confidence == 0.85

    @pytest.mark.parametrize("thumb", [False, True])
    def test_pointing_ignores_thumb(self, classifier, thumb):
        """Only the index finger up."""
        result = classifier.classify(hand_with("index", thumb=thumb))

        assert result.name is GestureLabel.POINTING
        assert result.confidence == 0.85

    @pytest.mark.parametrize("raised", list(itertools.combinations(FINGERS, 3)))
    @pytest.mark.parametrize("thumb", [False, True])
    def test_three_fingers_is_unknown(self, classifier, raised, thumb):
        result = classifier.classify(hand_with(*raised, thumb=thumb))

        assert result.name is GestureLabel.UNKNOWN
        assert result.confidence == 0.50

    def test_four_fingers_without_thumb_is_unknown(self, classifier):
        result = classifier.classify(hand_with(*FINGERS))
        assert result.name is GestureLabel.UNKNOWN

    @pytest.mark.parametrize("raised", [("index", "ring"), ("middle", "ring"), ("ring", "pinky")])
    def test_other_two_finger_pairs_are_unknown(self, classifier, raised):
        """Two raised fingers other than index+middle fall through, thumb or not."""
        assert classifier.classify(hand_with(*raised, thumb=True)).name is GestureLabel.UNKNOWN
        assert classifier.classify(hand_with(*raised)).name is GestureLabel.UNKNOWN

    def test_single_non_index_finger_is_unknown(self, classifier):
        assert classifier.classify(hand_with("middle")).name is GestureLabel.UNKNOWN
        assert classifier.classify(hand_with("pinky", thumb=True)).name is GestureLabel.UNKNOWN

    def test_every_pose_yields_label_and_valid_confidence(self, classifier):
        """All 32 thumb/finger combinations map into the closed label set."""
        for thumb in (False, True):
            for n in range(5):
                for raised in itertools.combinations(FINGERS, n):
                    result = classifier.classify(hand_with(*raised, thumb=thumb))
                    assert isinstance(result.name, GestureLabel)
                    assert 0.0 < result.confidence <= 1.0
                    assert result.confidence == CONFIDENCES[result.name]

    def test_deterministic(self, classifier):
        hand = hand_with("index", "middle")
        assert classifier.classify(hand) == classifier.classify(hand)

    def test_input_not_mutated(self, classifier):
        hand = hand_with("index", thumb=True)
        before = list(hand.landmarks)
        classifier.classify(hand)
        assert hand.landmarks == before

    def test_debug_logs_finger_states(self, classifier, caplog):
        with caplog.at_level(logging.DEBUG, logger="hand_gestures.recognition.gesture_classifier"):
            classifier.classify(hand_with("index"))
        assert "Finger states" in caplog.text
        assert "Pointing" in caplog.text

    def test_module_level_classify(self):
        assert classify(hand_with()) == GestureResult(GestureLabel.FIST, 0.95)


class TestThumbOrientation:
    """The thumb rule compares x only; orientation is fixed."""

    def test_mirrored_hand_flips_thumb(self):
        # Reflect an open hand horizontally: the thumb now reads as tucked
        hand = hand_with(*FINGERS, thumb=True)
        mirrored = [[1.0 - x, y, z] for x, y, z in as_points(hand)]

        assert classify(hand).name is GestureLabel.OPEN_HAND
        assert classify(mirrored).name is GestureLabel.UNKNOWN

    def test_thumb_compares_tip_to_mcp(self):
        points = as_points(hand_with())
        points[4][0] = points[2][0] - 0.001
        assert classify(points).name is GestureLabel.THUMBS_UP

        points[4][0] = points[2][0]
        assert classify(points).name is GestureLabel.FIST


class TestInputValidation:
    """Invalid hands fail fast with InvalidHandError."""

    @pytest.mark.parametrize("count", [0, 10, 20, 22])
    def test_wrong_landmark_count(self, count):
        points = as_points(hand_with())
        points = (points * 2)[:count]
        with pytest.raises(InvalidHandError, match="21 landmarks"):
            classify(points)

    def test_missing_y_coordinate(self):
        points = [{"x": x, "y": y} for x, y, _ in as_points(hand_with())]
        del points[8]["y"]
        with pytest.raises(InvalidHandError, match="landmark 8"):
            classify(points)

    def test_nan_coordinate(self):
        points = as_points(hand_with())
        points[12][1] = float("nan")
        with pytest.raises(InvalidHandError, match="landmark 12"):
            classify(points)

    def test_non_numeric_coordinate(self):
        points = as_points(hand_with())
        points[3] = ["left", 0.4]
        with pytest.raises(InvalidHandError):
            classify(points)

    @pytest.mark.parametrize("value", [None, 42, "hand", {"x": 0.1, "y": 0.2}])
    def test_not_a_hand(self, value):
        with pytest.raises(InvalidHandError):
            classify(value)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            classify([])


class TestInputShapes:
    """Landmarks are accepted in the shapes common detectors produce."""

    @pytest.fixture
    def points(self):
        return as_points(hand_with("index", "middle"))

    def test_tuples_without_depth(self, points):
        assert classify([(x, y) for x, y, _ in points]).name is GestureLabel.PEACE_SIGN

    def test_mappings(self, points):
        hand = [{"x": x, "y": y, "z": z} for x, y, z in points]
        assert classify(hand).name is GestureLabel.PEACE_SIGN

    def test_attribute_objects(self, points):
        """MediaPipe NormalizedLandmark exposes x/y/z attributes."""
        hand = [SimpleNamespace(x=x, y=y, z=z) for x, y, z in points]
        assert classify(hand).name is GestureLabel.PEACE_SIGN

    def test_numpy_array(self, points):
        assert classify(np.array(points)).name is GestureLabel.PEACE_SIGN

    def test_numpy_wrong_shape(self):
        with pytest.raises(InvalidHandError):
            classify(np.zeros((21,)))


class TestFingerStates:
    """Test suite for finger state extraction."""

    def test_peace_states(self):
        states = finger_states(hand_with("index", "middle", thumb=True))

        assert states == FingerStates(thumb=True, index=True, middle=True, ring=False, pinky=False)
        assert states.extended_count == 2

    def test_thumb_not_counted(self):
        assert finger_states(hand_with(thumb=True)).extended_count == 0

    def test_as_dict(self):
        states = finger_states(hand_with("pinky"))
        assert states.as_dict() == {
            "thumb": False, "index": False, "middle": False, "ring": False, "pinky": True,
        }

    def test_tip_level_with_pip_is_curled(self):
        hand = create_mock_landmarks({})
        points = as_points(hand)
        points[8][1] = points[6][1]
        assert classify(points).name is GestureLabel.FIST


class TestMatchGesture:
    """Rule order, independent of landmark geometry."""

    def test_rules(self):
        def states(thumb, *raised):
            return FingerStates(thumb=thumb, **{f: f in raised for f in FINGERS})

        assert match_gesture(states(True)) is GestureLabel.THUMBS_UP
        assert match_gesture(states(False)) is GestureLabel.FIST
        assert match_gesture(states(True, *FINGERS)) is GestureLabel.OPEN_HAND
        assert match_gesture(states(False, "index", "middle")) is GestureLabel.PEACE_SIGN
        assert match_gesture(states(True, "index")) is GestureLabel.POINTING
        assert match_gesture(states(False, "index", "pinky")) is GestureLabel.UNKNOWN


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
