from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import cv2

from .config import TrackerConfig
from .exceptions import ModelAssetError, TrackerInitError
from .model_assets import ensure_hand_landmarker_task
from .types import NUM_LANDMARKS, HandLandmark, HandPosition
from .utils import bbox_from_points, center_from_points, to_pixel

logger = logging.getLogger(__name__)

FINGERTIPS = {"thumb": 4, "index": 8, "middle": 12, "ring": 16, "pinky": 20}


@dataclass(frozen=True)
class _SolutionsBackend:
    hands: object


@dataclass(frozen=True)
class _TasksBackend:
    mp: object
    landmarker: object


def _try_create_solutions_backend(cfg: TrackerConfig) -> Optional[_SolutionsBackend]:
    import mediapipe as mp  # type: ignore

    if not hasattr(mp, "solutions"):
        return None
    hands = mp.solutions.hands.Hands(
        static_image_mode=cfg.static_image_mode,
        max_num_hands=cfg.max_num_hands,
        model_complexity=cfg.model_complexity,
        min_detection_confidence=cfg.min_detection_confidence,
        min_tracking_confidence=cfg.min_tracking_confidence,
    )
    return _SolutionsBackend(hands=hands)


def _tasks_running_mode(cfg: TrackerConfig, running_mode):
    # IMAGE mode runs detection on every call; VIDEO mode tracks across timestamped frames.
    return running_mode.IMAGE if cfg.static_image_mode else running_mode.VIDEO


def _try_create_tasks_backend(cfg: TrackerConfig) -> _TasksBackend:
    """
    Fallback for MediaPipe distributions that do not include `mp.solutions`.

    Uses the MediaPipe Tasks HandLandmarker API, which requires a `.task` model asset on disk.
    """

    import mediapipe as mp  # type: ignore
    from mediapipe.tasks.python import BaseOptions  # type: ignore
    from mediapipe.tasks.python.vision import HandLandmarker, HandLandmarkerOptions, RunningMode  # type: ignore

    model_path = ensure_hand_landmarker_task(cfg.tasks_model_path)

    options = HandLandmarkerOptions(
        base_options=BaseOptions(model_asset_path=model_path),
        running_mode=_tasks_running_mode(cfg, RunningMode),
        num_hands=cfg.max_num_hands,
        min_hand_detection_confidence=cfg.min_detection_confidence,
        min_tracking_confidence=cfg.min_tracking_confidence,
    )
    landmarker = HandLandmarker.create_from_options(options)
    return _TasksBackend(mp=mp, landmarker=landmarker)


def build_hand_position(landmarks: Sequence, label: Optional[str], score: Optional[float], w: int, h: int) -> HandPosition:
    """Turn one hand's normalized landmarks into a `HandPosition` for a `w` x `h` frame."""
    lm_px: List[HandLandmark] = []
    for idx, lm in enumerate(landmarks):
        x_px, y_px = to_pixel(float(lm.x), float(lm.y), w, h)
        lm_px.append(
            HandLandmark(
                idx=idx,
                x=float(lm.x),
                y=float(lm.y),
                z=float(getattr(lm, "z", 0.0)),
                x_px=x_px,
                y_px=y_px,
            )
        )

    pts_px = [(lm.x_px, lm.y_px) for lm in lm_px]
    tips = {}
    if len(lm_px) == NUM_LANDMARKS:
        tips = {name: (lm_px[i].x_px, lm_px[i].y_px) for name, i in FINGERTIPS.items()}

    return HandPosition(
        handedness_label=label,
        handedness_score=score,
        landmarks=lm_px,
        bbox_px=bbox_from_points(pts_px),
        center_px=center_from_points(pts_px),
        fingertips_px=tips,
    )


class HandTracker:
    """
    Hand landmark tracker using MediaPipe Hands.

    Input frames are expected as **BGR** images (OpenCV default).
    """

    def __init__(self, config: Optional[TrackerConfig] = None) -> None:
        self.config = config or TrackerConfig()
        self._tasks: Optional[_TasksBackend] = None
        self._tasks_timestamp_ms = 0

        self._solutions: Optional[_SolutionsBackend] = _try_create_solutions_backend(self.config)
        if self._solutions is not None:
            logger.info("Using MediaPipe solutions backend (max_num_hands=%d)", self.config.max_num_hands)
            return

        try:
            self._tasks = _try_create_tasks_backend(self.config)
        except ModelAssetError as e:
            raise TrackerInitError(
                "MediaPipe does not provide `mp.solutions` in your environment, so the\n"
                "Tasks HandLandmarker fallback is used, and it needs a model file on disk:\n"
                f"  {self.config.tasks_model_path}"
            ) from e
        except (ImportError, AttributeError, RuntimeError, ValueError) as e:
            raise TrackerInitError(
                "Could not initialize MediaPipe Hands.\n"
                "Your installed `mediapipe` package does not expose `mp.solutions`, and the Tasks fallback\n"
                "could not be initialized.\n\n"
                "Run this and paste the output:\n"
                "  python3 -c \"import mediapipe as mp; print(mp.__file__); print(getattr(mp,'__version__',None))\""
            ) from e
        logger.info("Using MediaPipe Tasks backend (%s)", self.config.tasks_model_path)

    def close(self) -> None:
        if self._solutions is not None:
            self._solutions.hands.close()
        if self._tasks is not None:
            self._tasks.landmarker.close()

    def __enter__(self) -> "HandTracker":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def detect(self, frame_bgr) -> List[HandPosition]:
        h, w = frame_bgr.shape[:2]
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        if self._solutions is not None:
            results = self._solutions.hands.process(frame_rgb)
            if not results.multi_hand_landmarks:
                return []

            handedness_list = results.multi_handedness or []
            positions: List[HandPosition] = []
            for i, hand_landmarks in enumerate(results.multi_hand_landmarks):
                label: Optional[str] = None
                score: Optional[float] = None
                if i < len(handedness_list) and handedness_list[i].classification:
                    c = handedness_list[i].classification[0]
                    label = getattr(c, "label", None)
                    score = float(getattr(c, "score", 0.0))
                positions.append(build_hand_position(hand_landmarks.landmark, label, score, w, h))
            return positions

        if self._tasks is None:
            return []

        mp = self._tasks.mp
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=frame_rgb)

        if self.config.static_image_mode:
            result = self._tasks.landmarker.detect(mp_image)
        else:
            # VIDEO mode requires monotonically increasing timestamps.
            self._tasks_timestamp_ms += 33
            result = self._tasks.landmarker.detect_for_video(mp_image, self._tasks_timestamp_ms)

        hand_landmarks_list = getattr(result, "hand_landmarks", None) or []
        handedness_list = getattr(result, "handedness", None) or []

        positions = []
        for i, landmarks in enumerate(hand_landmarks_list):
            label = None
            score = None
            if i < len(handedness_list) and handedness_list[i]:
                cat0 = handedness_list[i][0]
                label = getattr(cat0, "category_name", None) or getattr(cat0, "display_name", None)
                score = float(getattr(cat0, "score", 0.0))
            positions.append(build_hand_position(landmarks, label, score, w, h))
        return positions
