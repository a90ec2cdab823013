from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional, Tuple

import numpy as np

from .grid import Bounds, Chunk, Piece, cell_valid, clear_one_row, merge, occupancy_grid, piece_valid
from .pieces import spawn


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    DROP = 3
    NONE = 4


class Outcome(IntEnum):
    MOVED = 0
    BLOCKED = 1
    LOCKED = 2
    GAME_OVER = 3


class MoveResult(NamedTuple):
    piece: Optional[Piece]
    chunk: Chunk
    outcome: Outcome


def shift(dx: int, dy: int, bounds: Bounds, piece: Optional[Piece], chunk: Chunk,
          rng: Optional[random.Random] = None) -> MoveResult:
    """Translate `piece` by (dx, dy).

    A blocked downward move locks the piece into the chunk and spawns the
    next one; any other blocked move leaves the state untouched.
    """
    if piece is None:
        return MoveResult(None, chunk, Outcome.BLOCKED)
    occupied = set(chunk)
    candidate = tuple((x + dx, y + dy) for x, y in piece)
    if all(cell_valid(x, y, bounds, occupied) for x, y in candidate):
        return MoveResult(candidate, chunk, Outcome.MOVED)
    if dy >= 0:
        return MoveResult(piece, chunk, Outcome.BLOCKED)
    merged = merge(piece, chunk)
    new_piece = spawn(bounds, rng)
    outcome = Outcome.LOCKED if piece_valid(bounds, new_piece, merged) else Outcome.GAME_OVER
    return MoveResult(new_piece, merged, outcome)


def drop(bounds: Bounds, piece: Optional[Piece], chunk: Chunk,
         rng: Optional[random.Random] = None) -> MoveResult:
    """Hard drop: fall until the piece locks, all in one call."""
    if piece is None:
        return MoveResult(None, chunk, Outcome.BLOCKED)
    while True:
        result = shift(0, -1, bounds, piece, chunk, rng)
        if result.outcome in (Outcome.LOCKED, Outcome.GAME_OVER):
            return result
        piece = result.piece


def rotate(bounds: Bounds, piece: Optional[Piece], chunk: Chunk) -> Optional[Piece]:
    """Quarter turn of every cell about the first one.

    All-or-nothing: if any turned cell is out of bounds or hits the chunk,
    the input piece comes back as is.
    """
    if piece is None:
        return None
    occupied = set(chunk)
    px, py = piece[0]
    rotated = [piece[0]]
    for x, y in piece[1:]:
        rx = y + px - py
        ry = px + py - x
        if not cell_valid(rx, ry, bounds, occupied):
            return piece
        rotated.append((rx, ry))
    return tuple(rotated)


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    origin_x: int = 0
    origin_y: int = 0
    random_seed: Optional[int] = None
    gravity_interval: int = 10  # fixed ticks per gravity step


class NetrisGame:
    """One board: its bounds, falling piece and settled chunk."""

    def __init__(self, config: Optional[GameConfig] = None, bounds: Optional[Bounds] = None) -> None:
        self.config = config or GameConfig()
        self.bounds = bounds or Bounds.from_size(
            self.config.width, self.config.height, self.config.origin_x, self.config.origin_y
        )
        self.rng = random.Random(self.config.random_seed)
        self.piece: Optional[Piece] = None
        self.chunk: Chunk = ()
        self.game_over = False
        self.last_outcome = Outcome.MOVED
        self.rows_cleared_total = 0
        self._tick_count = 0
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.chunk = ()
        self.rows_cleared_total = 0
        self._tick_count = 0
        self.game_over = False
        self.last_outcome = Outcome.MOVED
        self.piece = spawn(self.bounds, self.rng)
        if not piece_valid(self.bounds, self.piece, self.chunk):
            self._end()

    def _end(self) -> None:
        self.game_over = True
        self.last_outcome = Outcome.GAME_OVER

    def _apply(self, result: MoveResult) -> Outcome:
        self.piece, self.chunk = result.piece, result.chunk
        self.last_outcome = result.outcome
        if result.outcome == Outcome.GAME_OVER:
            self._end()
        return result.outcome

    def move(self, dx: int, dy: int) -> Outcome:
        if self.game_over:
            return Outcome.GAME_OVER
        return self._apply(shift(dx, dy, self.bounds, self.piece, self.chunk, self.rng))

    def hard_drop(self) -> Outcome:
        if self.game_over:
            return Outcome.GAME_OVER
        return self._apply(drop(self.bounds, self.piece, self.chunk, self.rng))

    def rotate(self) -> Outcome:
        if self.game_over:
            return Outcome.GAME_OVER
        rotated = rotate(self.bounds, self.piece, self.chunk)
        self.last_outcome = Outcome.BLOCKED if rotated == self.piece else Outcome.MOVED
        self.piece = rotated
        return self.last_outcome

    def step(self, action: Action) -> Outcome:
        """Apply one discrete input event."""
        if action == Action.LEFT:
            return self.move(-1, 0)
        if action == Action.RIGHT:
            return self.move(1, 0)
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.DROP:
            return self.hard_drop()
        return Outcome.GAME_OVER if self.game_over else Outcome.BLOCKED

    def fixed_update(self) -> Optional[int]:
        """Advance the periodic tick; returns the row cleared on this tick, if any.

        Gravity runs on the first tick and then every `gravity_interval`
        ticks, followed by clearing at most one full row.
        """
        if self.game_over:
            return None
        tick = self._tick_count
        self._tick_count += 1
        if tick % max(1, self.config.gravity_interval) != 0:
            return None
        self.move(0, -1)
        self.chunk, row = clear_one_row(self.chunk, self.bounds)
        if row is not None:
            self.rows_cleared_total += 1
        return row

    def snapshot(self) -> Tuple[Optional[Piece], Chunk]:
        return self.piece, self.chunk

    def get_state(self) -> np.ndarray:
        return occupancy_grid(self.bounds, self.piece, self.chunk)
