"""
Landmark fixtures shared by the test suites.
"""

from hand_gestures.detection.landmarks import HandLandmarks, Landmark

FINGERS = ("index", "middle", "ring", "pinky")


def create_mock_landmarks(finger_states: dict, handedness: str = "Right") -> HandLandmarks:
    """
    Create mock hand landmarks for testing.

    Args:
        finger_states: Dict of finger -> "up" or "down"; missing fingers are "down"

    Returns:
        Mock HandLandmarks object for a right hand in a mirrored view
    """
    # Base positions for a hand at center of frame
    base_x, base_y = 0.5, 0.6  # Wrist position

    landmarks = []

    # Wrist
    landmarks.append(Landmark(x=base_x, y=base_y, z=0.0))

    # Thumb (indices 1-4). Extended thumb reaches left past its MCP,
    # a tucked thumb folds right across the palm.
    thumb_up = finger_states.get("thumb", "down") == "up"
    landmarks.append(Landmark(x=base_x - 0.04, y=base_y - 0.02, z=0.0))  # CMC
    landmarks.append(Landmark(x=base_x - 0.07, y=base_y - 0.05, z=0.0))  # MCP
    if thumb_up:
        landmarks.append(Landmark(x=base_x - 0.11, y=base_y - 0.07, z=0.0))  # IP
        landmarks.append(Landmark(x=base_x - 0.15, y=base_y - 0.09, z=0.0))  # TIP
    else:
        landmarks.append(Landmark(x=base_x - 0.03, y=base_y - 0.08, z=0.0))  # IP
        landmarks.append(Landmark(x=base_x + 0.01, y=base_y - 0.09, z=0.0))  # TIP

    # Index finger (indices 5-8)
    index_up = finger_states.get("index", "down") == "up"
    for y_off in [0.08, 0.14, 0.20, 0.28 if index_up else 0.10]:
        landmarks.append(Landmark(x=base_x - 0.05, y=base_y - y_off, z=0.0))

    # Middle finger (indices 9-12)
    middle_up = finger_states.get("middle", "down") == "up"
    for y_off in [0.09, 0.16, 0.23, 0.32 if middle_up else 0.11]:
        landmarks.append(Landmark(x=base_x, y=base_y - y_off, z=0.0))

    # Ring finger (indices 13-16)
    ring_up = finger_states.get("ring", "down") == "up"
    for y_off in [0.08, 0.14, 0.20, 0.28 if ring_up else 0.10]:
        landmarks.append(Landmark(x=base_x + 0.05, y=base_y - y_off, z=0.0))

    # Pinky finger (indices 17-20)
    pinky_up = finger_states.get("pinky", "down") == "up"
    for y_off in [0.06, 0.11, 0.16, 0.22 if pinky_up else 0.08]:
        landmarks.append(Landmark(x=base_x + 0.1, y=base_y - y_off, z=0.0))

    return HandLandmarks(
        landmarks=landmarks,
        handedness=handedness,
        confidence=0.95,
    )


def hand_with(*raised: str, thumb: bool = False) -> HandLandmarks:
    """Shorthand: hand_with("index", "middle", thumb=True)."""
    states = {finger: "up" for finger in raised}
    if thumb:
        states["thumb"] = "up"
    return create_mock_landmarks(states)


def as_points(hand: HandLandmarks) -> list:
    """Plain [x, y, z] lists, the way a recording stores them."""
    return [[lm.x, lm.y, lm.z] for lm in hand.landmarks]
