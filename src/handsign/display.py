from __future__ import annotations

import logging
from typing import List, Optional

from .config import OverlayConfig
from .drawing import draw_banner, draw_landmarks, draw_skeleton
from .gestures import classify_hands
from .types import Gesture, HandPosition

logger = logging.getLogger(__name__)


class GestureDisplay:
    """
    Per-frame results handler: draws the hand overlay and the current gesture.

    Classification itself is stateless; this object only remembers the last
    result so the UI (and the log) can report changes.
    """

    def __init__(self, config: Optional[OverlayConfig] = None) -> None:
        self.config = config or OverlayConfig()
        self.current_gesture: Optional[Gesture] = None

    def on_results(self, frame_bgr, hands: List[HandPosition]):
        for hand in hands:
            draw_skeleton(frame_bgr, hand.landmarks, self.config)
            draw_landmarks(frame_bgr, hand.landmarks, self.config)

        gesture = classify_hands(hands)
        if gesture is not self.current_gesture:
            logger.info("Gesture: %s", gesture.label)
        self.current_gesture = gesture

        draw_banner(frame_bgr, gesture.label, self.config)
        return frame_bgr
