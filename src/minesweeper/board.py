"""
Board module for Minesweeper game.

Implements the board grid, board configuration, mine placement
and adjacency counting.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .cell import Cell, CellState
from .exceptions import InvalidConfiguration, OutOfBounds

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Position, ...] = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)


class GameStatus(Enum):
    """Possible states of the game."""

    IDLE = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        """Check if no further moves are accepted."""
        return self in (GameStatus.WON, GameStatus.LOST)


def _validate_dimensions(rows: int, cols: int, num_mines: int) -> None:
    """Ensure board dimensions and mine count are usable."""
    if rows < 1 or cols < 1:
        raise InvalidConfiguration("Board dimensions must be positive")
    if num_mines < 0:
        raise InvalidConfiguration("Number of mines cannot be negative")
    max_mines = rows * cols - 1
    if num_mines > max_mines:
        raise InvalidConfiguration(f"Too many mines (max {max_mines})")


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
        flags_block_cascade: Whether flagged cells stop a cascade reveal.
            When False, a cascade clears and opens flagged neighbors.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10
    flags_block_cascade: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        _validate_dimensions(self.rows, self.cols, self.num_mines)

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Cells are stored row-major in a single list, so the cell at
    (row, col) lives at index ``row * cols + col``.
    """

    rows: int
    cols: int
    num_mines: int = 0
    _cells: List[Cell] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate dimensions and create the grid if none was given."""
        _validate_dimensions(self.rows, self.cols, self.num_mines)
        if not self._cells:
            self._cells = [Cell() for _ in range(self.rows * self.cols)]

    @classmethod
    def from_mines(
        cls, rows: int, cols: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Build a board with mines at the given positions.

        Adjacent mine counts are computed for every cell.

        Args:
            rows: Number of rows.
            cols: Number of columns.
            mines: (row, col) positions holding a mine.

        Returns:
            A fresh board with all cells closed.
        """
        mine_set = set(mines)
        board = cls(rows, cols, len(mine_set))
        for row, col in mine_set:
            board.check_position(row, col)
        board._cells = [
            Cell(is_mine=position in mine_set) for position in board.positions()
        ]
        _calculate_adjacent_mines(board)
        return board

    # ========================================================================
    # Position Utilities (Low-level)
    # ========================================================================

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def check_position(self, row: int, col: int) -> None:
        """Raise OutOfBounds if position is outside the board."""
        if not self.is_valid_position(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.is_valid_position(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def positions(self) -> Iterator[Position]:
        """Iterate over all positions in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    # ========================================================================
    # Cell Access
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position, raising OutOfBounds if invalid."""
        self.check_position(row, col)
        return self._cells[row * self.cols + col]

    @property
    def cells(self) -> Tuple[Cell, ...]:
        """All cells in row-major order."""
        return tuple(self._cells)

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def open_count(self) -> int:
        """Number of open cells."""
        return sum(1 for cell in self._cells if cell.is_open)

    @property
    def flag_count(self) -> int:
        """Number of flagged cells."""
        return sum(1 for cell in self._cells if cell.is_flagged)

    def mine_positions(self) -> FrozenSet[Position]:
        """Positions of all mines."""
        return frozenset(
            (row, col)
            for row, col in self.positions()
            if self._cells[row * self.cols + col].is_mine
        )

    def flagged_positions(self) -> FrozenSet[Position]:
        """Positions of all flagged cells."""
        return frozenset(
            (row, col)
            for row, col in self.positions()
            if self._cells[row * self.cols + col].state == CellState.FLAGGED
        )


# ============================================================================
# Adjacency Counting
# ============================================================================

def count_adjacent_mines(board: Board, row: int, col: int) -> int:
    """Count mines adjacent to a specific cell."""
    count = 0
    for neighbor_row, neighbor_col in board.neighbors(row, col):
        if board.get_cell(neighbor_row, neighbor_col).is_mine:
            count += 1
    return count


def _calculate_adjacent_mines(board: Board) -> None:
    """Calculate adjacent mine counts for all cells."""
    for row, col in board.positions():
        cell = board.get_cell(row, col)
        if not cell.is_mine:
            cell.adjacent_mines = count_adjacent_mines(board, row, col)


# ============================================================================
# Board Generation
# ============================================================================

def _get_valid_mine_positions(
    board: Board, excluded: FrozenSet[Position]
) -> List[Position]:
    """Get all positions not in the excluded set."""
    return [pos for pos in board.positions() if pos not in excluded]


def generate_board(
    rows: int,
    cols: int,
    num_mines: int,
    safe_row: int,
    safe_col: int,
    rng: Optional[random.Random] = None,
) -> Board:
    """
    Generate a new board with randomly placed mines.

    The 3x3 neighborhood around the safe cell is kept mine-free when
    enough other cells remain. Otherwise only the safe cell itself is
    excluded.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Mines to place.
        safe_row: Row of the first clicked cell.
        safe_col: Column of the first clicked cell.
        rng: Random source, defaults to the module-level generator.

    Returns:
        A fresh board with mines placed and adjacent counts computed.

    Raises:
        InvalidConfiguration: If dimensions or mine count are out of range.
        OutOfBounds: If the safe cell is outside the board.
    """
    _validate_dimensions(rows, cols, num_mines)
    layout = Board(rows, cols)
    layout.check_position(safe_row, safe_col)
    rng = rng or random

    safe_zone = frozenset(
        [(safe_row, safe_col)] + layout.neighbors(safe_row, safe_col)
    )
    positions = _get_valid_mine_positions(layout, safe_zone)
    if len(positions) < num_mines:
        logger.debug(
            "Safe zone too large for %d mines on %dx%d, excluding only (%d, %d)",
            num_mines, rows, cols, safe_row, safe_col,
        )
        positions = _get_valid_mine_positions(
            layout, frozenset([(safe_row, safe_col)])
        )

    mines = rng.sample(positions, num_mines)
    logger.debug("Placed %d mines on %dx%d board", num_mines, rows, cols)
    return Board.from_mines(rows, cols, mines)
