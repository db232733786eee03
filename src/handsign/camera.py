from __future__ import annotations

import logging
import platform
from typing import Iterator

import cv2

from .config import CameraConfig
from .exceptions import CameraNotFoundError

logger = logging.getLogger(__name__)


def open_camera(config: CameraConfig) -> "cv2.VideoCapture":
    """Open the webcam and request the configured resolution."""
    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(config.camera_index, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(config.camera_index)
    if not cap.isOpened():
        raise CameraNotFoundError(
            f"Could not open camera index {config.camera_index}. "
            "On macOS: System Settings -> Privacy & Security -> Camera -> allow your terminal."
        )

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, config.width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config.height)
    logger.info(
        "Opened camera %d at %dx%d",
        config.camera_index,
        int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
        int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
    )
    return cap


def frames(cap, mirror: bool = True) -> Iterator:
    """Yield BGR frames until the capture stops delivering them."""
    while True:
        ok, frame = cap.read()
        if not ok:
            logger.info("Camera stopped delivering frames")
            return
        if mirror:
            frame = cv2.flip(frame, 1)
        yield frame
