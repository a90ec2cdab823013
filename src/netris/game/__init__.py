"""Game module for Netris.

Exports the board engine and supporting pieces:
- Bounds: Playable rectangle of one board
- PieceShape: Enum of the six catalog shapes
- shift / drop / rotate: Pure piece transitions
- find_full_row / clear_row: Row detection and removal
- NetrisGame: Per-board state driven by input events and a fixed tick
- detect_bounds: Playable rectangle from a static layout
"""

from .grid import Bounds, cell_valid, piece_valid, find_full_row, clear_row, clear_one_row, occupancy_grid
from .pieces import PieceShape, SHAPE_OFFSETS, spawn
from .core import Action, Outcome, MoveResult, GameConfig, NetrisGame, shift, drop, rotate
from .layout import detect_bounds, mask_from_rows

__all__ = [
    "Bounds",
    "cell_valid",
    "piece_valid",
    "find_full_row",
    "clear_row",
    "clear_one_row",
    "occupancy_grid",
    "PieceShape",
    "SHAPE_OFFSETS",
    "spawn",
    "Action",
    "Outcome",
    "MoveResult",
    "GameConfig",
    "NetrisGame",
    "shift",
    "drop",
    "rotate",
    "detect_bounds",
    "mask_from_rows",
]
