"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, GameSession


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with a single mine at (0, 0)."""
    return Board.from_mines(3, 3, [(0, 0)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board.from_mines(5, 5, [])


@pytest.fixture
def walled_board() -> Board:
    """
    5x5 board with a wall of mines down column 2.

    Columns 0-1 and 3-4 form two separate safe regions.
    """
    return Board.from_mines(5, 5, [(row, 2) for row in range(5)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def closed_cell() -> Cell:
    """Create a closed cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

class FakeClock:
    """Manually advanced time source."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Create a controllable clock."""
    return FakeClock()


WALL_MINES = [(row, 6) for row in range(9)] + [(0, 8)]


@pytest.fixture
def rig_layout(monkeypatch):
    """
    Replace random mine placement with a fixed layout.

    Returns a function taking the mine positions to use.
    """
    def install(mines):
        def fixed_board(rows, cols, num_mines, safe_row, safe_col, rng=None):
            return Board.from_mines(rows, cols, mines)
        monkeypatch.setattr("minesweeper.session.generate_board", fixed_board)
    return install


@pytest.fixture
def session(clock: FakeClock, rig_layout) -> GameSession:
    """
    Beginner session with a fake clock and a fixed layout.

    Mines fill column 6 plus (0, 8), so revealing (4, 4) opens
    columns 0-5 and leaves the game in progress.
    """
    rig_layout(WALL_MINES)
    return GameSession(BoardConfig(9, 9, 10), rng=random.Random(7), clock=clock)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
