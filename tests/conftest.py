from __future__ import annotations

import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from tetris_rl.game import GameConfig, Piece, TetrisGame, TetrominoType  # noqa: E402


@pytest.fixture
def game() -> TetrisGame:
    return TetrisGame(GameConfig(random_seed=1234))


def place(game: TetrisGame, kind: TetrominoType) -> Piece:
    """Swap the active piece for ``kind`` at its spawn position."""
    piece = Piece.of(kind, game.grid.width)
    game.current_piece = piece
    return piece


class FixedRandom(random.Random):
    """Random source whose choice() always returns one tetromino type."""

    def __init__(self, kind: TetrominoType) -> None:
        super().__init__(0)
        self.kind = kind

    def choice(self, seq):
        return self.kind
