from __future__ import annotations

from typing import Iterable, List, Optional

from netris.game.grid import Cell


def encode(cells: Optional[Iterable[Cell]]) -> str:
    """`x,y,` per cell, trailing comma included. No cells gives ``""``."""
    return "".join(f"{x},{y}," for x, y in (cells or ()))


def _parse_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except ValueError:
        return None


def decode(payload: Optional[str]) -> List[Cell]:
    """Inverse of `encode`; never raises.

    Tokens are read in pairs. A pair that is not two integers (including a
    dangling token from a truncated payload) is skipped.
    """
    if not payload:
        return []
    tokens = payload.split(",")
    cells: List[Cell] = []
    for i in range(0, len(tokens) - 1, 2):
        x = _parse_int(tokens[i])
        if x is None:
            continue
        y = _parse_int(tokens[i + 1])
        if y is None:
            continue
        cells.append((x, y))
    return cells
