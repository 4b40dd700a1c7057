from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

import numpy as np

from .grid import GameGrid
from .pieces import Piece
from .rules import ScoringRules
from .shapes import BASE_SHAPES, Shape, TetrominoType

logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    HARD_DROP = 4
    RESTART = 5

    @classmethod
    def parse(cls, value: Any) -> Optional["Command"]:
        """Map a member, its int value or its name to a Command.

        Accepts ``"MoveLeft"``, ``"move_left"`` and ``"MOVE_LEFT"`` spellings.
        Returns None for anything unrecognized.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, np.integer)):
            try:
                return cls(int(value))
            except ValueError:
                return None
        if isinstance(value, str):
            key = value.replace("_", "").replace("-", "").upper()
            for member in cls:
                if member.name.replace("_", "") == key:
                    return member
        return None


class GameStatus(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        tallest = max(s.shape[0] for s in BASE_SHAPES.values())
        if self.height < tallest:
            raise ValueError(f"height must be at least {tallest}, got {self.height}")
        widest = max(s.shape[1] for s in BASE_SHAPES.values())
        if self.width < widest:
            raise ValueError(f"width must be at least {widest}, got {self.width}")


@dataclass(frozen=True, eq=False)
class GameView:
    """Read-only snapshot handed to render sinks."""

    board: np.ndarray
    piece_kind: TetrominoType
    piece_shape: Shape
    piece_x: int
    piece_y: int
    score: int
    game_over: bool
    lines_cleared_total: int = 0

    def overlay(self) -> np.ndarray:
        state = self.board.copy()
        rows, cols = np.nonzero(self.piece_shape)
        h, w = state.shape
        for dy, dx in zip(rows, cols):
            x = self.piece_x + int(dx)
            y = self.piece_y + int(dy)
            if 0 <= y < h and 0 <= x < w:
                # Negative marks the falling piece
                state[y, x] = -int(self.piece_kind)
        return state


class TetrisGame:
    """Board, active piece, score and game-over flag behind one API.

    Every operation is synchronous and never raises; commands that cannot be
    applied leave the state untouched.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.current_piece: Piece
        self._spawn()

    @property
    def status(self) -> GameStatus:
        return GameStatus.GAME_OVER if self.game_over else GameStatus.RUNNING

    def restart(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self._spawn()
        logger.info("game restarted")

    def _spawn(self) -> None:
        piece = Piece.spawn(self.grid.width, self.rng)
        logger.debug("spawned %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        self.current_piece = piece
        # Top-out: the fresh piece has nowhere to go
        if not self._fits(piece):
            self.game_over = True
            logger.info("game over with score %d", self.score)

    def _fits(self, piece: Piece) -> bool:
        return not self.grid.collides(piece.x, piece.y, piece.shape)

    def _try(self, candidate: Piece) -> bool:
        if self.game_over or not self._fits(candidate):
            return False
        self.current_piece = candidate
        return True

    def _lock_piece(self) -> None:
        piece = self.current_piece
        self.grid.merge(piece)
        self.pieces_locked += 1
        lines = self.grid.clear_lines()
        if lines:
            self.lines_cleared_total += lines
            self.score += self.rules.score_for_lines(lines)
            logger.debug("cleared %d line(s), score %d", lines, self.score)
        self._spawn()

    def tick(self) -> None:
        if self.game_over:
            return
        if not self._try(self.current_piece.moved(0, 1)):
            self._lock_piece()

    def move_left(self) -> None:
        self._try(self.current_piece.moved(-1, 0))

    def move_right(self) -> None:
        self._try(self.current_piece.moved(1, 0))

    def soft_drop(self) -> None:
        self.tick()

    def rotate(self) -> None:
        self._try(self.current_piece.rotated())

    def hard_drop(self) -> None:
        if self.game_over:
            return
        while self._try(self.current_piece.moved(0, 1)):
            pass
        self.tick()

    def apply(self, command: Any) -> Optional[Command]:
        """Run one input command. Returns the parsed command, or None if ignored."""
        cmd = Command.parse(command)
        if cmd is None:
            logger.debug("ignoring unrecognized command %r", command)
            return None
        if cmd == Command.MOVE_LEFT:
            self.move_left()
        elif cmd == Command.MOVE_RIGHT:
            self.move_right()
        elif cmd == Command.SOFT_DROP:
            self.soft_drop()
        elif cmd == Command.ROTATE:
            self.rotate()
        elif cmd == Command.HARD_DROP:
            self.hard_drop()
        elif cmd == Command.RESTART:
            self.restart()
        return cmd

    def snapshot(self) -> GameView:
        board = self.grid.clone_state()
        board.setflags(write=False)
        piece = self.current_piece
        return GameView(
            board=board,
            piece_kind=piece.kind,
            piece_shape=piece.shape,
            piece_x=piece.x,
            piece_y=piece.y,
            score=self.score,
            game_over=self.game_over,
            lines_cleared_total=self.lines_cleared_total,
        )

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        if self.game_over:
            return self.grid.clone_state()
        return self.snapshot().overlay()
