from __future__ import annotations

from typing import Optional

import pygame

from tetris_core.game import Snapshot, TetrominoType
from tetris_core.game import pieces
from .palette import color_for_value


GHOST_COLOR = (90, 90, 100)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, preview_width: int = 5) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.preview_width = preview_width

    def window_size(self, width: int, height: int) -> tuple[int, int]:
        board_w = width * self.cell_size
        return (
            board_w + self.margin * 3 + self.preview_width * self.cell_size,
            height * self.cell_size + self.margin * 2,
        )

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            x * self.cell_size,
            y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, snap: Snapshot) -> pygame.Surface:
        h, w = snap.grid.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, color_for_value(int(snap.grid[y, x])), self._cell_rect(x, y))
        if snap.active_kind is not None:
            for x, y in snap.ghost_cells:
                if y >= 0:
                    pygame.draw.rect(surf, GHOST_COLOR, self._cell_rect(x, y), 2)
            color = color_for_value(int(snap.active_kind))
            for x, y in snap.active_cells:
                # Cells in the hidden rows above the board are not drawn
                if y >= 0:
                    pygame.draw.rect(surf, color, self._cell_rect(x, y))
        return surf

    def _preview_surface(self, upcoming: tuple[TetrominoType, ...]) -> pygame.Surface:
        slot = self.cell_size * 5
        surf = pygame.Surface((self.preview_width * self.cell_size, max(1, len(upcoming)) * slot))
        surf.fill((10, 10, 14))
        for idx, kind in enumerate(upcoming):
            color = color_for_value(int(kind))
            for dx, dy in pieces.cells(kind, 0):
                rect = self._cell_rect(dx, dy).move(0, idx * slot)
                pygame.draw.rect(surf, color, rect)
        return surf

    def draw(self, screen: pygame.Surface, snap: Snapshot, message: Optional[str] = None) -> None:
        grid_surf = self._grid_surface(snap)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        if snap.next_pieces:
            x0 = self.margin * 2 + grid_surf.get_width()
            screen.blit(self._preview_surface(snap.next_pieces), (x0, self.margin))
        if message:
            font = pygame.font.SysFont(None, 28)
            text = font.render(message, True, (255, 255, 255))
            screen.blit(text, text.get_rect(center=(screen.get_width() // 2, 30)))
        pygame.display.flip()
