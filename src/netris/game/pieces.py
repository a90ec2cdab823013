from __future__ import annotations

import random
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .grid import Bounds, Cell, Piece


class PieceShape(IntEnum):
    T = 0
    L = 1
    Z = 2
    J = 3
    S = 4
    I = 5


# First offset is the rotation pivot.
SHAPE_OFFSETS: Mapping[PieceShape, Tuple[Cell, ...]] = MappingProxyType(
    {
        PieceShape.T: ((0, -1), (1, -1), (0, 0), (-1, -1)),
        PieceShape.L: ((0, -1), (1, -1), (1, 0), (-1, -1)),
        PieceShape.Z: ((0, -1), (1, -1), (0, 0), (-1, 0)),
        PieceShape.J: ((0, -1), (1, -1), (-1, 0), (-1, -1)),
        PieceShape.S: ((0, -1), (-1, -1), (0, 0), (1, 0)),
        PieceShape.I: ((0, 0), (-1, 0), (-2, 0), (1, 0)),
    }
)


def place_shape(shape: PieceShape, bounds: Bounds) -> Piece:
    """Absolute cells of `shape` anchored at the top-center of `bounds`."""
    cx, top = bounds.center_x, bounds.max_y
    return tuple((cx + dx, top + dy) for dx, dy in SHAPE_OFFSETS[shape])


def spawn(bounds: Bounds, rng: Optional[random.Random] = None) -> Piece:
    """Pick a shape uniformly at random and place it at the spawn point.

    No validity check happens here; callers test the result with
    `piece_valid` to detect that the board is topped out.
    """
    rng = rng or random
    shape = rng.choice(list(PieceShape))
    return place_shape(shape, bounds)
