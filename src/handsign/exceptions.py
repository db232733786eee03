"""
Exceptions raised by handsign.
"""


class HandSignError(Exception):
    """Base exception for handsign errors."""
    pass


class InvalidLandmarksError(HandSignError, ValueError):
    """Raised when a landmark set is not 21 well-formed points."""
    pass


class TrackerInitError(HandSignError, RuntimeError):
    """Raised when neither MediaPipe backend can be initialized."""
    pass


class ModelAssetError(HandSignError, RuntimeError):
    """Raised when the HandLandmarker model file is missing and cannot be downloaded."""
    pass


class CameraError(HandSignError, RuntimeError):
    """Base exception for camera-related errors."""
    pass


class CameraNotFoundError(CameraError):
    """Raised when camera cannot be found or opened."""
    pass
