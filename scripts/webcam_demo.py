from __future__ import annotations

import argparse
import logging
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from handsign.camera import frames, open_camera  # noqa: E402
from handsign.config import CameraConfig, TrackerConfig  # noqa: E402
from handsign.detector import HandTracker  # noqa: E402
from handsign.display import GestureDisplay  # noqa: E402

WINDOW_NAME = "handsign - press q to quit"


def main() -> int:
    ap = argparse.ArgumentParser(description="Live webcam hand gesture overlay.")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=1280, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=720, help="Capture height (best effort)")
    ap.add_argument("--max-hands", type=int, default=2, help="Maximum number of hands to detect")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Disable horizontal mirroring (default is mirrored/selfie mode)",
    )
    ap.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = ap.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    camera_cfg = CameraConfig(camera_index=args.camera, width=args.width, height=args.height, mirror=not args.no_mirror)
    tracker_cfg = TrackerConfig(max_num_hands=args.max_hands)

    cap = open_camera(camera_cfg)
    display = GestureDisplay()
    try:
        with HandTracker(tracker_cfg) as tracker:
            for frame in frames(cap, mirror=camera_cfg.mirror):
                hands = tracker.detect(frame)
                frame = display.on_results(frame, hands)

                cv2.imshow(WINDOW_NAME, frame)
                key = cv2.waitKey(1) & 0xFF
                if key in (ord("q"), 27):
                    break
    finally:
        cap.release()
        cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
