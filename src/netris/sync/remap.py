from __future__ import annotations

from typing import Iterable, List

from netris.game.grid import Bounds, Cell


def remap(cells: Iterable[Cell], from_bounds: Bounds, to_bounds: Bounds) -> List[Cell]:
    """Translate cells between board origins.

    Pure translation: no scaling and no clipping, so cells may land outside
    `to_bounds` when the boards differ in size.
    """
    dx = to_bounds.min_x - from_bounds.min_x
    dy = to_bounds.min_y - from_bounds.min_y
    return [(x + dx, y + dy) for x, y in cells]
