from .exceptions import HandSignError, InvalidLandmarksError
from .gestures import GESTURE_RULES, classify, classify_hands
from .types import Gesture, HandLandmark, HandPosition

__all__ = [
    "GESTURE_RULES",
    "Gesture",
    "HandLandmark",
    "HandPosition",
    "HandSignError",
    "InvalidLandmarksError",
    "classify",
    "classify_hands",
]
