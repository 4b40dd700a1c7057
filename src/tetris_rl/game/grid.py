from __future__ import annotations

import numpy as np

from .pieces import Piece
from .shapes import Shape


class GameGrid:
    """Fixed-size board of locked cells.

    Row 0 is the top. Cells hold 0 when empty, otherwise the type id of the
    piece that locked there. Rows with a negative index sit above the visible
    board: they never collide with board contents and are never written.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def collides(self, origin_x: int, origin_y: int, shape: Shape) -> bool:
        rows, cols = np.nonzero(shape)
        for dy, dx in zip(rows, cols):
            x = origin_x + int(dx)
            y = origin_y + int(dy)
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def merge(self, piece: Piece) -> None:
        value = int(piece.kind)
        for x, y in piece.cells():
            if y >= 0 and 0 <= x < self.width:
                self.grid[y, x] = value

    def clear_lines(self) -> int:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Survivors keep their order and sink to the bottom
        kept = np.delete(self.grid, full_rows, axis=0)
        self.grid[:num] = 0
        self.grid[num:] = kept
        return num

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
