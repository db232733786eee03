from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Callable, Optional, Sequence, Tuple, Union

from .exceptions import InvalidLandmarksError
from .types import NUM_LANDMARKS, Gesture, HandPosition, LandmarkSet

logger = logging.getLogger(__name__)


# Landmark indices (MediaPipe Hands convention).
THUMB_BASE = 2
THUMB_IP = 3
THUMB_TIP = 4
INDEX_BASE = 5
INDEX_TIP = 8
MIDDLE_BASE = 9
MIDDLE_TIP = 12
RING_BASE = 13
RING_TIP = 16
PINKY_BASE = 17
PINKY_TIP = 20

# (tip, base) per finger, thumb first.
FINGER_PAIRS: Tuple[Tuple[int, int], ...] = (
    (THUMB_TIP, THUMB_BASE),
    (INDEX_TIP, INDEX_BASE),
    (MIDDLE_TIP, MIDDLE_BASE),
    (RING_TIP, RING_BASE),
    (PINKY_TIP, PINKY_BASE),
)

# Empirical thresholds in normalized image units; keep as-is.
CLOSE_Y = 0.1
PINCH_DISTANCE = 0.1
THUMB_PINKY_X = 0.05


Predicate = Callable[[LandmarkSet], bool]


def is_thumbs_up(landmarks: LandmarkSet) -> bool:
    thumb_tip = landmarks[THUMB_TIP]
    return thumb_tip.y < landmarks[THUMB_BASE].y and thumb_tip.y < landmarks[INDEX_BASE].y


def is_fist(landmarks: LandmarkSet) -> bool:
    """Every fingertip sits roughly level with its base."""
    return all(abs(landmarks[tip].y - landmarks[base].y) < CLOSE_Y for tip, base in FINGER_PAIRS)


def is_open_hand(landmarks: LandmarkSet) -> bool:
    """Every fingertip, thumb included, is above its base."""
    return all(landmarks[tip].y < landmarks[base].y for tip, base in FINGER_PAIRS)


def is_pointing(landmarks: LandmarkSet) -> bool:
    """Index extended, thumb out to the side, middle/ring/pinky curled."""
    index_extended = landmarks[INDEX_TIP].y < landmarks[INDEX_BASE].y
    thumb_extended = landmarks[THUMB_TIP].x < landmarks[THUMB_IP].x
    others_curled = all(landmarks[tip].y > landmarks[base].y for tip, base in FINGER_PAIRS[2:])
    return index_extended and thumb_extended and others_curled


def is_ok_sign(landmarks: LandmarkSet) -> bool:
    """Thumb and index tips pinched, remaining fingertips above the pinch."""
    thumb_tip = landmarks[THUMB_TIP]
    index_tip = landmarks[INDEX_TIP]
    pinched = abs(thumb_tip.x - index_tip.x) < PINCH_DISTANCE and abs(thumb_tip.y - index_tip.y) < PINCH_DISTANCE
    return pinched and all(landmarks[tip].y < index_tip.y for tip in (MIDDLE_TIP, RING_TIP, PINKY_TIP))


def is_three_fingers_up(landmarks: LandmarkSet) -> bool:
    extended = all(landmarks[tip].y < landmarks[base].y for tip, base in FINGER_PAIRS[1:4])
    thumb_on_pinky = abs(landmarks[THUMB_TIP].x - landmarks[PINKY_TIP].x) < THUMB_PINKY_X
    return extended and thumb_on_pinky


# First match wins. Overlapping configurations resolve to the earlier entry.
GESTURE_RULES: Tuple[Tuple[Gesture, Predicate], ...] = (
    (Gesture.OK_SIGN, is_ok_sign),
    (Gesture.FIST, is_fist),
    (Gesture.OPEN_HAND, is_open_hand),
    (Gesture.POINTING, is_pointing),
    (Gesture.THUMBS_UP, is_thumbs_up),
    (Gesture.THREE_FINGERS_UP, is_three_fingers_up),
)


def _check_coord(value, idx: int, axis: str) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidLandmarksError(f"landmark {idx}: {axis} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidLandmarksError(f"landmark {idx}: {axis} must be finite, got {value!r}")


def validate_landmarks(landmarks: LandmarkSet) -> None:
    """
    Raise `InvalidLandmarksError` unless `landmarks` holds 21 points with numeric `x`/`y`.
    """

    try:
        n = len(landmarks)
    except TypeError as e:
        raise InvalidLandmarksError(f"expected a sequence of {NUM_LANDMARKS} landmarks, got {type(landmarks).__name__}") from e
    if n != NUM_LANDMARKS:
        raise InvalidLandmarksError(f"expected {NUM_LANDMARKS} landmarks, got {n}")

    for idx, lm in enumerate(landmarks):
        for axis in ("x", "y"):
            if not hasattr(lm, axis):
                raise InvalidLandmarksError(f"landmark {idx} has no '{axis}' attribute")
            _check_coord(getattr(lm, axis), idx, axis)


def classify(
    landmarks: Optional[LandmarkSet],
    rules: Sequence[Tuple[Gesture, Predicate]] = GESTURE_RULES,
) -> Gesture:
    """
    Classify one hand's landmark set.

    `None` means no hand was detected in the frame. Otherwise the rules are tried in
    order and the first matching gesture is returned, or `Gesture.UNKNOWN`.
    """

    if landmarks is None:
        return Gesture.NO_HANDS_DETECTED

    validate_landmarks(landmarks)

    for gesture, predicate in rules:
        if predicate(landmarks):
            return gesture
    return Gesture.UNKNOWN


def classify_hands(hands: Sequence[Union[HandPosition, LandmarkSet]]) -> Gesture:
    """Classify the first detected hand; an empty sequence means no hands."""
    if not hands:
        return Gesture.NO_HANDS_DETECTED

    first = hands[0]
    if isinstance(first, HandPosition):
        first = first.landmarks
    gesture = classify(first)
    if len(hands) > 1:
        logger.debug("%d hands detected, classified the first as %s", len(hands), gesture.name)
    return gesture
