from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from tetris_rl.game import COLORS, GameView, TetrominoType

EMPTY_COLOR = (20, 20, 26)
GRID_LINE_COLOR = (136, 136, 136)
TEXT_COLOR = (230, 230, 230)


def _color_for_value(v: int) -> Tuple[int, int, int]:
    if v == 0:
        return EMPTY_COLOR
    try:
        return COLORS[TetrominoType(abs(v))]
    except ValueError:
        return (200, 200, 200)


class Renderer:
    """Paints a GameView; never touches the game itself."""

    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 160,
                 screen: Optional[pygame.Surface] = None) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self.screen = screen
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, cols: int, rows: int) -> Tuple[int, int]:
        width = self.margin * 3 + cols * self.cell_size + self.panel_width
        height = self.margin * 2 + rows * self.cell_size
        return width, height

    def cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + x * self.cell_size,
            self.margin + y * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, 28)
        return self._font

    def _draw_cells(self, surf: pygame.Surface, state: np.ndarray) -> None:
        h, w = state.shape
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                rect = self.cell_rect(x, y)
                pygame.draw.rect(surf, _color_for_value(v), rect)
                if v != 0:
                    pygame.draw.rect(surf, GRID_LINE_COLOR, rect, 1)

    def _draw_panel(self, surf: pygame.Surface, view: GameView) -> None:
        font = self._font_obj()
        cols = view.board.shape[1]
        x0 = self.margin * 2 + cols * self.cell_size
        lines = [f"Score: {view.score}", f"Lines: {view.lines_cleared_total}"]
        for i, text in enumerate(lines):
            surf.blit(font.render(text, True, TEXT_COLOR), (x0, self.margin + i * 30))

    def _draw_game_over(self, surf: pygame.Surface) -> None:
        font = self._font_obj()
        text = font.render("Game Over - press R to restart", True, (255, 255, 255))
        rect = text.get_rect(center=(surf.get_width() // 2, surf.get_height() // 2))
        backdrop = rect.inflate(20, 12)
        pygame.draw.rect(surf, (0, 0, 0), backdrop)
        surf.blit(text, rect)

    def render_to(self, surf: pygame.Surface, view: GameView) -> None:
        surf.fill((10, 10, 14))
        state = view.board if view.game_over else view.overlay()
        self._draw_cells(surf, state)
        self._draw_panel(surf, view)
        if view.game_over:
            self._draw_game_over(surf)

    def draw(self, screen: pygame.Surface, view: GameView) -> None:
        self.render_to(screen, view)
        pygame.display.flip()

    def render(self, view: GameView) -> None:
        if self.screen is not None:
            self.draw(self.screen, view)
