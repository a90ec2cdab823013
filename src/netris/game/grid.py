from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np


Cell = Tuple[int, int]
Piece = Tuple[Cell, ...]
Chunk = Tuple[Cell, ...]


@dataclass(frozen=True)
class Bounds:
    """Inclusive playable rectangle of one board.

    y grows upward, so `max_y` is the spawn row and gravity moves cells
    toward `min_y`.
    """

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_size(cls, width: int, height: int, origin_x: int = 0, origin_y: int = 0) -> "Bounds":
        return cls(origin_x, origin_y, origin_x + int(width) - 1, origin_y + int(height) - 1)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def center_x(self) -> int:
        # Truncates toward zero, also for boards left of the origin.
        return int((self.min_x + self.max_x) / 2)

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


def cell_valid(x: int, y: int, bounds: Bounds, chunk: Iterable[Cell]) -> bool:
    if not bounds.contains(x, y):
        return False
    return (x, y) not in chunk


def piece_valid(bounds: Bounds, piece: Optional[Piece], chunk: Chunk) -> bool:
    """True when a piece is present and none of its cells collide."""
    if piece is None:
        return False
    occupied = set(chunk)
    return all(cell_valid(x, y, bounds, occupied) for x, y in piece)


def merge(piece: Optional[Piece], chunk: Chunk) -> Chunk:
    if piece is None:
        return chunk
    return chunk + tuple(piece)


def find_full_row(chunk: Chunk, bounds: Bounds) -> Optional[int]:
    """Lowest row whose cell count equals the board width, if any."""
    if not chunk:
        return None
    counts = Counter(y for _, y in chunk)
    for row in range(bounds.min_y, bounds.max_y + 1):
        if counts[row] == bounds.width:
            return row
    return None


def clear_row(chunk: Chunk, row: int) -> Chunk:
    return tuple((x, y - 1) if y > row else (x, y) for x, y in chunk if y != row)


def clear_one_row(chunk: Chunk, bounds: Bounds) -> Tuple[Chunk, Optional[int]]:
    """Clear at most one full row; further full rows wait for later ticks."""
    row = find_full_row(chunk, bounds)
    if row is None:
        return chunk, None
    return clear_row(chunk, row), row


EMPTY = 0
CHUNK_CELL = 1
PIECE_CELL = 2


def occupancy_grid(bounds: Bounds, piece: Optional[Piece], chunk: Iterable[Cell]) -> np.ndarray:
    """Board as an int8 array, row 0 being the top row (`max_y`).

    Cells outside `bounds` are left out, which is how mirrored remote cells
    that do not fit the target board end up clipped for display.
    """
    grid = np.zeros((bounds.height, bounds.width), dtype=np.int8)
    for value, cells in ((CHUNK_CELL, chunk), (PIECE_CELL, piece or ())):
        for x, y in cells:
            if bounds.contains(x, y):
                grid[bounds.max_y - y, x - bounds.min_x] = value
    return grid
