from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from netris.game.grid import CHUNK_CELL, PIECE_CELL


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        CHUNK_CELL: (70, 200, 120),
        PIECE_CELL: (240, 160, 0),
    }
    return palette.get(v, (200, 200, 200))


class Renderer:
    """Draws the local board and the mirrored remote board side by side."""

    def __init__(self, cell_size: int = 24, margin: int = 20, status_height: int = 28) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.status_height = status_height

    def window_size(self, local_shape: Tuple[int, int], remote_shape: Tuple[int, int]) -> Tuple[int, int]:
        lh, lw = local_shape
        rh, rw = remote_shape
        width = (lw + rw) * self.cell_size + self.margin * 3
        height = max(lh, rh) * self.cell_size + self.margin * 2 + self.status_height
        return width, height

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def draw(self, screen: pygame.Surface, local: np.ndarray, remote: np.ndarray,
             status: Optional[str] = None, font: Optional[pygame.font.Font] = None) -> None:
        screen.fill((10, 10, 14))
        top = self.margin + self.status_height
        screen.blit(self._grid_surface(local), (self.margin, top))
        remote_x = self.margin * 2 + local.shape[1] * self.cell_size
        screen.blit(self._grid_surface(remote), (remote_x, top))
        if status and font is not None:
            img = font.render(status, True, (230, 230, 230))
            screen.blit(img, (self.margin, self.margin // 2))
        pygame.display.flip()
