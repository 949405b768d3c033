"""
Game session for Minesweeper.

Holds the board, status and timing of one game and applies player
actions to it. Mines are placed lazily on the first reveal so the
first clicked cell and its neighbors are always safe.
"""
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional, Tuple

import numpy as np

from . import engine
from .board import Board, BoardConfig, GameStatus, Position, generate_board
from .cell import CellState
from .engine import RevealResult
from .exceptions import OutOfBounds

logger = logging.getLogger(__name__)


# ============================================================================
# Action Results
# ============================================================================

@dataclass(frozen=True)
class RevealOutcome:
    """Result of a reveal or chord action."""

    opened_cells: FrozenSet[Position]
    hit_mine: bool
    status: GameStatus


@dataclass(frozen=True)
class FlagResult:
    """Result of a flag toggle."""

    row: int
    col: int
    new_state: CellState


# ============================================================================
# Board View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    What a renderer may know about one cell.

    Attributes:
        state: Visual state of the cell.
        adjacent_mines: Mine count, only set for open safe cells.
        is_mine: Only set once the game is lost.
    """

    state: CellState
    adjacent_mines: Optional[int] = None
    is_mine: Optional[bool] = None


@dataclass(frozen=True)
class BoardView:
    """Read-only snapshot of a session's board."""

    rows: int
    cols: int
    status: GameStatus
    cells: Tuple[CellView, ...]
    mine_positions: FrozenSet[Position] = frozenset()

    def cell(self, row: int, col: int) -> CellView:
        """
        Get the view of a single cell.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise OutOfBounds(row, col, self.rows, self.cols)
        return self.cells[row * self.cols + col]

    def to_array(self) -> np.ndarray:
        """
        Get board view as a numpy array.

        Returns:
            Read-only 2D int8 array where:
                -1 = closed
                -2 = flagged
                0-8 = open with adjacent count
                9 = mine (open, or shown after a loss)
        """
        obs = np.full((self.rows, self.cols), -1, dtype=np.int8)
        for index, view in enumerate(self.cells):
            row, col = divmod(index, self.cols)
            if view.state == CellState.FLAGGED:
                obs[row, col] = -2
            elif view.state == CellState.OPEN and view.adjacent_mines is not None:
                obs[row, col] = view.adjacent_mines
        for row, col in self.mine_positions:
            if self.cell(row, col).state != CellState.FLAGGED:
                obs[row, col] = 9
        obs.flags.writeable = False
        return obs


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    One game of Minesweeper.

    Status moves IDLE -> PLAYING on the first reveal and ends in WON or
    LOST. Once the game is over, every action is a no-op.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            rng: Random source for mine placement.
            clock: Monotonic time source in seconds.
        """
        self.config = config or BoardConfig()
        self.rng = rng or random.Random()
        self._clock = clock
        self.reset()

    def reset(self) -> None:
        """Start over with an unmined board."""
        self.board = Board(self.config.rows, self.config.cols)
        self.status = GameStatus.IDLE
        self._started_at: Optional[float] = None
        self._finished_at: Optional[float] = None

    # ========================================================================
    # Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell.

        On the first reveal, mines are placed around the clicked cell.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        self.board.check_position(row, col)
        if self.status.is_terminal:
            return self._outcome(engine.EMPTY_RESULT)
        if not self.board.get_cell(row, col).is_closed:
            return self._outcome(engine.EMPTY_RESULT)

        if self.status == GameStatus.IDLE:
            self._start(row, col)

        result = engine.reveal(
            self.board, row, col, self.config.flags_block_cascade
        )
        return self._finish_move(result)

    def chord(self, row: int, col: int) -> RevealOutcome:
        """Reveal the closed neighbors of a satisfied number."""
        self.board.check_position(row, col)
        if self.status != GameStatus.PLAYING:
            return self._outcome(engine.EMPTY_RESULT)
        result = engine.chord(
            self.board, row, col, self.config.flags_block_cascade
        )
        return self._finish_move(result)

    def toggle_flag(self, row: int, col: int) -> FlagResult:
        """
        Toggle the flag on a cell.

        Flagging never changes the game status.

        Raises:
            OutOfBounds: If the position is outside the board.
        """
        self.board.check_position(row, col)
        if self.status.is_terminal:
            new_state = self.board.get_cell(row, col).state
        else:
            new_state = engine.toggle_flag(self.board, row, col)
        return FlagResult(row, col, new_state)

    def _start(self, row: int, col: int) -> None:
        """Place mines, keeping any flags set before the first click."""
        flags = self.board.flagged_positions()
        self.board = generate_board(
            self.config.rows,
            self.config.cols,
            self.config.num_mines,
            row,
            col,
            rng=self.rng,
        )
        for flag_row, flag_col in flags:
            engine.toggle_flag(self.board, flag_row, flag_col)
        self.status = GameStatus.PLAYING
        self._started_at = self._clock()
        logger.info(
            "Game started on %dx%d board with %d mines",
            self.config.rows, self.config.cols, self.config.num_mines,
        )

    def _finish_move(self, result: RevealResult) -> RevealOutcome:
        """Evaluate the board after a reveal and record game end."""
        if result.changed:
            self.status = engine.evaluate(self.board, result)
            if self.status.is_terminal:
                self._finished_at = self._clock()
                logger.info(
                    "Game %s after %.1f seconds",
                    self.status.name.lower(), self.elapsed,
                )
        return self._outcome(result)

    def _outcome(self, result: RevealResult) -> RevealOutcome:
        return RevealOutcome(result.opened_cells, result.hit_mine, self.status)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def elapsed(self) -> float:
        """Seconds since the first reveal, frozen once the game ends."""
        if self._started_at is None:
            return 0.0
        end = self._finished_at
        if end is None:
            end = self._clock()
        return end - self._started_at

    @property
    def flags_remaining(self) -> int:
        """Mines left to flag, negative when over-flagged."""
        return self.config.num_mines - self.board.flag_count

    @property
    def is_over(self) -> bool:
        """Check if the game has ended."""
        return self.status.is_terminal

    def board_view(self) -> BoardView:
        """
        Get a read-only snapshot for rendering.

        Adjacent counts are exposed for open cells only. Mine positions
        are exposed only after the game is lost.
        """
        lost = self.status == GameStatus.LOST
        cells = []
        for cell in self.board.cells:
            count = None
            if cell.is_open and not cell.is_mine:
                count = cell.adjacent_mines
            cells.append(
                CellView(
                    state=cell.state,
                    adjacent_mines=count,
                    is_mine=cell.is_mine if lost else None,
                )
            )
        return BoardView(
            rows=self.board.rows,
            cols=self.board.cols,
            status=self.status,
            cells=tuple(cells),
            mine_positions=self.board.mine_positions() if lost else frozenset(),
        )

    def valid_actions(self) -> List[Position]:
        """Positions that can still be revealed."""
        if self.status.is_terminal:
            return []
        return [
            (row, col)
            for row, col in self.board.positions()
            if self.board.get_cell(row, col).is_closed
        ]


def new_game(
    rows: int,
    cols: int,
    num_mines: int,
    flags_block_cascade: bool = True,
    seed: Optional[int] = None,
) -> GameSession:
    """
    Create a session with no mines placed yet.

    Raises:
        InvalidConfiguration: If dimensions or mine count are out of range.
    """
    config = BoardConfig(rows, cols, num_mines, flags_block_cascade)
    return GameSession(config, rng=random.Random(seed))
