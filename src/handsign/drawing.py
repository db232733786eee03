from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import cv2
import numpy as np

from .config import OverlayConfig
from .types import HandLandmark


# Open chains (wrist to fingertip) plus the closed palm outline.
FINGER_CHAINS: List[Tuple[int, ...]] = [
    (0, 1, 2, 3, 4),  # thumb
    (0, 5, 6, 7, 8),  # index
    (9, 10, 11, 12),  # middle
    (13, 14, 15, 16),  # ring
    (0, 17, 18, 19, 20),  # pinky
]
PALM_OUTLINE: Tuple[int, ...] = (5, 9, 13, 17)


def draw_text(frame, text: str, org: Tuple[int, int], color=(255, 255, 255), scale=0.6, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_polyline(frame, points: Iterable[Tuple[int, int]], color=(255, 255, 0), thickness=2, closed=False):
    pts = np.array([(int(x), int(y)) for x, y in points], dtype=np.int32)
    if pts.shape[0] < 2:
        return frame
    cv2.polylines(frame, [pts], closed, color, thickness, cv2.LINE_AA)
    return frame


def draw_skeleton(frame, landmarks: Sequence[HandLandmark], cfg: OverlayConfig):
    """Connector lines between the 21 landmarks of one hand."""
    if len(landmarks) < 21:
        return frame
    for chain in FINGER_CHAINS:
        draw_polyline(
            frame,
            [(landmarks[i].x_px, landmarks[i].y_px) for i in chain],
            color=cfg.connector_color,
            thickness=cfg.connector_thickness,
        )
    draw_polyline(
        frame,
        [(landmarks[i].x_px, landmarks[i].y_px) for i in PALM_OUTLINE],
        color=cfg.connector_color,
        thickness=cfg.connector_thickness,
    )
    return frame


def draw_landmarks(frame, landmarks: Sequence[HandLandmark], cfg: OverlayConfig):
    for lm in landmarks:
        cv2.circle(frame, (lm.x_px, lm.y_px), cfg.landmark_radius, cfg.landmark_color, -1, lineType=cv2.LINE_AA)
    return frame


def draw_banner(frame, text: str, cfg: OverlayConfig):
    """Gesture name on a dark strip across the top of the frame."""
    (_, text_h), baseline = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, cfg.text_scale, 2)
    x, y = cfg.banner_origin
    bottom = min(frame.shape[0], y + baseline + 8)
    strip = frame[0:bottom, :]
    # Darken in place so the camera image stays visible underneath.
    strip[:] = (strip.astype(np.float32) * 0.45).astype(frame.dtype)
    return draw_text(frame, text, (x, max(text_h, y)), color=cfg.text_color, scale=cfg.text_scale)
