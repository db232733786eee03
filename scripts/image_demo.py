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

from handsign.config import TrackerConfig  # noqa: E402
from handsign.detector import HandTracker  # noqa: E402
from handsign.display import GestureDisplay  # noqa: E402
from handsign.gestures import classify  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Classify the hand gesture in a still image.")
    ap.add_argument("--image", required=True, help="Path to input image")
    ap.add_argument("--out", required=True, help="Path to output image (annotated)")
    ap.add_argument("--max-hands", type=int, default=2, help="Maximum number of hands to detect")
    ap.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = ap.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    frame = cv2.imread(args.image)
    if frame is None:
        raise RuntimeError(f"Could not read image: {args.image}")

    with HandTracker(TrackerConfig(static_image_mode=True, max_num_hands=args.max_hands)) as tracker:
        hands = tracker.detect(frame)

    display = GestureDisplay()
    out = display.on_results(frame, hands)

    ok = cv2.imwrite(args.out, out)
    if not ok:
        raise RuntimeError(f"Could not write output image: {args.out}")

    print(f"gesture: {display.current_gesture}")
    for i, h in enumerate(hands):
        print(f"[{i}] {h.handedness_label} score={h.handedness_score} bbox={h.bbox_px} gesture={classify(h.landmarks)}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
