"""
A single square of the minefield.

A cell knows whether it holds a mine, how many of its neighbors do,
and whether the player has opened or flagged it. The mine flag is
fixed when the cell is built.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """What the player sees on a square."""

    CLOSED = auto()
    OPEN = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    One square of the board.

    Attributes:
        is_mine: Set when the cell is built, read-only afterwards.
        adjacent_mines: Mines among the up to eight surrounding squares.
            Left at 0 and never read for mine cells.
        state: CLOSED until opened or flagged; OPEN never reverts.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.CLOSED

    def __setattr__(self, name: str, value) -> None:
        if name == "is_mine" and "is_mine" in self.__dict__:
            raise AttributeError("is_mine is fixed once the cell is built")
        super().__setattr__(name, value)

    def open(self) -> bool:
        """
        Move a closed square to OPEN.

        Returns:
            False when the square is already open or carries a flag.
        """
        if self.state != CellState.CLOSED:
            return False
        self.state = CellState.OPEN
        return True

    def toggle_flag(self) -> bool:
        """
        Swap between CLOSED and FLAGGED.

        Returns:
            False when the square is open and nothing changed.
        """
        if self.state == CellState.OPEN:
            return False
        if self.state == CellState.CLOSED:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.CLOSED
        return True

    @property
    def is_closed(self) -> bool:
        return self.state == CellState.CLOSED

    @property
    def is_open(self) -> bool:
        return self.state == CellState.OPEN

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED
