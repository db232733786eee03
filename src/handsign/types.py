from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


Point2 = Tuple[int, int]
Box2 = Tuple[int, int, int, int]  # (x_min, y_min, x_max, y_max)

# Anything exposing normalized `.x` / `.y`: HandLandmark or a raw MediaPipe landmark.
LandmarkSet = Sequence[Any]

NUM_LANDMARKS = 21


@dataclass(frozen=True)
class HandLandmark:
    """A single hand landmark with both normalized and pixel coordinates."""

    idx: int
    x: float
    y: float
    z: float
    x_px: int
    y_px: int


@dataclass(frozen=True)
class HandPosition:
    """Detected hand positions for a single hand."""

    handedness_label: Optional[str]  # "Left" / "Right" (may be None)
    handedness_score: Optional[float]
    landmarks: List[HandLandmark]  # length 21
    bbox_px: Box2
    center_px: Point2
    fingertips_px: Dict[str, Point2]  # thumb/index/middle/ring/pinky


_EMOJI: Dict[str, str] = {
    "OK_SIGN": "\U0001F44C",
    "FIST": "✊",
    "OPEN_HAND": "\U0001F590️",
    "POINTING": "\U0001F449",
    "THUMBS_UP": "\U0001F44D",
    "THREE_FINGERS_UP": "|||",
}


class Gesture(Enum):
    """Result of classifying one frame."""

    OK_SIGN = "OK Sign"
    FIST = "Fist"
    OPEN_HAND = "Open Hand"
    POINTING = "Pointing"
    THUMBS_UP = "Thumbs Up"
    THREE_FINGERS_UP = "Three Fingers Up"
    UNKNOWN = "Unknown Gesture"
    NO_HANDS_DETECTED = "No Hands Detected"

    @property
    def label(self) -> str:
        return self.value

    @property
    def emoji_label(self) -> str:
        # OpenCV's Hershey fonts cannot draw these; meant for UIs that can.
        prefix = _EMOJI.get(self.name)
        if prefix is None:
            return self.value
        return f"{prefix} {self.value}"

    def __str__(self) -> str:
        return self.value
