"""
Configuration for the tracker, the camera and the overlay.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Color = Tuple[int, int, int]  # BGR


@dataclass
class TrackerConfig:
    """MediaPipe Hands settings."""

    static_image_mode: bool = False
    max_num_hands: int = 2
    model_complexity: int = 1  # 0 = lite, 1 = full
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    tasks_model_path: str = "models/hand_landmarker.task"  # only used by the Tasks fallback

    def __post_init__(self):
        """Validate configuration."""
        if self.max_num_hands < 1:
            raise ValueError("max_num_hands must be >= 1")
        if self.model_complexity not in (0, 1):
            raise ValueError("model_complexity must be 0 or 1")
        for name in ("min_detection_confidence", "min_tracking_confidence"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0.0 and 1.0")


@dataclass
class CameraConfig:
    """Webcam capture settings."""

    camera_index: int = 0
    width: int = 1280  # best effort
    height: int = 720
    mirror: bool = True  # selfie view

    def __post_init__(self):
        if self.camera_index < 0:
            raise ValueError("camera_index must be >= 0")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")


@dataclass
class OverlayConfig:
    """Colors and sizes used when drawing on frames."""

    connector_color: Color = (0, 255, 0)
    connector_thickness: int = 5
    landmark_color: Color = (0, 0, 255)
    landmark_radius: int = 4
    text_color: Color = (255, 255, 255)
    text_scale: float = 1.0
    banner_origin: Tuple[int, int] = (12, 40)

    def __post_init__(self):
        if self.connector_thickness <= 0:
            raise ValueError("connector_thickness must be positive")
        if self.landmark_radius <= 0:
            raise ValueError("landmark_radius must be positive")
        if self.text_scale <= 0:
            raise ValueError("text_scale must be positive")
