"""
Minesweeper game module.

Provides core game logic including board generation, cascading reveal,
flagging, win/loss evaluation and game sessions.
"""
from .cell import Cell, CellState
from .board import (
    Board,
    BoardConfig,
    GameStatus,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    count_adjacent_mines,
    generate_board,
)
from .engine import RevealResult, chord, evaluate, reveal, toggle_flag
from .exceptions import InvalidConfiguration, MinesweeperError, OutOfBounds
from .session import (
    BoardView,
    CellView,
    FlagResult,
    GameSession,
    RevealOutcome,
    new_game,
)
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "GameStatus",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "count_adjacent_mines",
    "generate_board",
    "RevealResult",
    "chord",
    "evaluate",
    "reveal",
    "toggle_flag",
    "InvalidConfiguration",
    "MinesweeperError",
    "OutOfBounds",
    "BoardView",
    "CellView",
    "FlagResult",
    "GameSession",
    "RevealOutcome",
    "new_game",
    "MinesweeperEnv",
]
