"""Game module for Tetris RL.

Exports the core game engine and supporting classes:
- TetrominoType / shape_of: Shape catalog and piece colors
- Piece / rotate: Live tetromino with rotation
- GameGrid: Board with collision, merge and line clearing
- ScoringRules: Points per cleared line
- TetrisGame: State machine (running, game over, restart)
- GravityClock / GameDriver: Gravity timing and serialized input
"""

from .shapes import COLORS, TetrominoType, shape_of
from .pieces import Piece, rotate
from .grid import GameGrid
from .rules import ScoringRules
from .core import Command, GameConfig, GameStatus, GameView, TetrisGame
from .clock import GameDriver, GravityClock, RenderSink

__all__ = [
    "COLORS",
    "TetrominoType",
    "shape_of",
    "Piece",
    "rotate",
    "GameGrid",
    "ScoringRules",
    "Command",
    "GameConfig",
    "GameStatus",
    "GameView",
    "TetrisGame",
    "GameDriver",
    "GravityClock",
    "RenderSink",
]
