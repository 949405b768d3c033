"""
Exceptions raised by the Minesweeper engine.

Only precondition violations are errors. Actions that leave the board
unchanged (revealing an open cell, flagging after the game ended) are
reported through their return values instead.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board dimensions or mine count are out of range."""


class OutOfBounds(MinesweeperError, IndexError):
    """A coordinate lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Position ({row}, {col}) is outside a {rows}x{cols} board"
        )
        self.row = row
        self.col = col
