from __future__ import annotations

import math
import random
from dataclasses import dataclass, replace
from typing import Iterator, Tuple

import numpy as np

from .shapes import Shape, TetrominoType, shape_of


def rotate(shape: Shape) -> Shape:
    """Transpose, then reverse the row order. Returns a new array."""
    rotated = np.array(np.asarray(shape).T[::-1], copy=True)
    rotated.setflags(write=False)
    return rotated


@dataclass(eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0  # negative while partly above the board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.x == other.x
            and self.y == other.y
            and np.array_equal(self.shape, other.shape)
        )

    @classmethod
    def spawn(cls, board_width: int, rng: random.Random) -> "Piece":
        kind = rng.choice(list(TetrominoType))
        return cls.of(kind, board_width)

    @classmethod
    def of(cls, kind: int, board_width: int) -> "Piece":
        shape = shape_of(kind)
        w = shape.shape[1]
        x = board_width // 2 - math.ceil(w / 2)
        return cls(kind=TetrominoType(kind), shape=shape, x=x, y=0)

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate(self.shape))

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Absolute (x, y) of every occupied cell, including rows above the board."""
        for dy, dx in zip(*np.nonzero(self.shape)):
            yield self.x + int(dx), self.y + int(dy)
