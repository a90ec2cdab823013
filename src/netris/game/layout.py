from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .grid import Bounds


def mask_from_rows(rows: Iterable[str]) -> np.ndarray:
    """Occupancy mask from text art, top row first.

    Spaces and dots are empty, anything else is a playable cell. The result
    is indexed `mask[y, x]` with y growing upward.
    """
    lines = [line.rstrip("\n") for line in rows]
    width = max((len(line) for line in lines), default=0)
    mask = np.zeros((len(lines), width), dtype=np.bool_)
    for row, line in enumerate(reversed(lines)):
        for x, ch in enumerate(line):
            mask[row, x] = ch not in " ."
    return mask


def detect_bounds(mask: np.ndarray, origin: Tuple[int, int] = (0, 0)) -> Bounds:
    """Smallest rectangle covering every playable cell of a layout."""
    ys, xs = np.nonzero(np.asarray(mask))
    if xs.size == 0:
        raise ValueError("layout has no playable cells")
    ox, oy = origin
    return Bounds(
        min_x=ox + int(xs.min()),
        min_y=oy + int(ys.min()),
        max_x=ox + int(xs.max()),
        max_y=oy + int(ys.max()),
    )
