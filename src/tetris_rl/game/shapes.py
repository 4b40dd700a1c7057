from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    Z = 6
    T = 7


Shape = np.ndarray
Color = Tuple[int, int, int]


def _frozen(rows) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
}

COLORS: Dict[TetrominoType, Color] = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 170, 0),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.T: (136, 0, 136),
}


def shape_of(kind: int) -> Shape:
    """Canonical spawn-orientation grid for ``kind``. The array is read-only."""
    return BASE_SHAPES[TetrominoType(kind)]


def cell_count(shape: Shape) -> int:
    return int(np.count_nonzero(shape))
