from __future__ import annotations

from typing import Iterable, List, Tuple


def to_pixel(x_norm: float, y_norm: float, w: int, h: int) -> Tuple[int, int]:
    """Normalized [0, 1] coordinates to a pixel inside a `w` x `h` frame."""
    x_px = max(0, min(w - 1, int(round(x_norm * w))))
    y_px = max(0, min(h - 1, int(round(y_norm * h))))
    return (x_px, y_px)


def _split(points: Iterable[Tuple[int, int]]) -> Tuple[List[int], List[int]]:
    xs: List[int] = []
    ys: List[int] = []
    for x, y in points:
        xs.append(x)
        ys.append(y)
    return xs, ys


def bbox_from_points(points: Iterable[Tuple[int, int]]) -> Tuple[int, int, int, int]:
    xs, ys = _split(points)
    if not xs:
        return (0, 0, 0, 0)
    return (min(xs), min(ys), max(xs), max(ys))


def center_from_points(points: Iterable[Tuple[int, int]]) -> Tuple[int, int]:
    xs, ys = _split(points)
    if not xs:
        return (0, 0)
    return (int(sum(xs) / len(xs)), int(sum(ys) / len(ys)))
