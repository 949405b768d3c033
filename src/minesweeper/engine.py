"""
Game rules for Minesweeper.

Board transitions used by the game session: cascading reveal,
flag toggling, chording and win/loss evaluation.
"""
from dataclasses import dataclass
from typing import FrozenSet, List, Set

from .board import Board, GameStatus, Position
from .cell import CellState


@dataclass(frozen=True)
class RevealResult:
    """
    Outcome of a reveal on the board.

    Attributes:
        opened_cells: Positions opened by this action.
        hit_mine: Whether a mine was opened.
    """

    opened_cells: FrozenSet[Position] = frozenset()
    hit_mine: bool = False

    @property
    def changed(self) -> bool:
        """Check if the board was modified."""
        return bool(self.opened_cells)

    def merge(self, other: "RevealResult") -> "RevealResult":
        """Combine two results into one."""
        return RevealResult(
            self.opened_cells | other.opened_cells,
            self.hit_mine or other.hit_mine,
        )


EMPTY_RESULT = RevealResult()


# ============================================================================
# Reveal
# ============================================================================

def reveal(
    board: Board, row: int, col: int, flags_block_cascade: bool = True
) -> RevealResult:
    """
    Open a cell, cascading through neighbors of zero-count cells.

    Only a closed cell can be revealed. Opening a mine stops immediately.
    The cascade uses an explicit stack and a visited set so every cell
    is processed at most once.

    Args:
        board: Board to modify.
        row: Row index to reveal.
        col: Column index to reveal.
        flags_block_cascade: If False, the cascade also opens flagged
            neighbors.

    Returns:
        The opened positions and whether a mine was hit.

    Raises:
        OutOfBounds: If the position is outside the board.
    """
    cell = board.get_cell(row, col)
    if not cell.open():
        return EMPTY_RESULT

    if cell.is_mine:
        return RevealResult(frozenset([(row, col)]), hit_mine=True)

    opened: Set[Position] = {(row, col)}
    visited: Set[Position] = {(row, col)}
    stack: List[Position] = [(row, col)] if cell.adjacent_mines == 0 else []

    while stack:
        current_row, current_col = stack.pop()
        for neighbor in board.neighbors(current_row, current_col):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            neighbor_cell = board.get_cell(*neighbor)
            if neighbor_cell.is_flagged and not flags_block_cascade:
                neighbor_cell.state = CellState.CLOSED
            if not neighbor_cell.open():
                continue
            opened.add(neighbor)
            if neighbor_cell.adjacent_mines == 0:
                stack.append(neighbor)

    return RevealResult(frozenset(opened))


def chord(
    board: Board, row: int, col: int, flags_block_cascade: bool = True
) -> RevealResult:
    """
    Reveal all closed neighbors of a satisfied number.

    The target must be open with at least one adjacent mine, and the
    number of flagged neighbors must equal its count.

    Returns:
        Merged result of every neighbor reveal, empty if not applicable.
    """
    cell = board.get_cell(row, col)
    if not cell.is_open or cell.is_mine or cell.adjacent_mines == 0:
        return EMPTY_RESULT

    neighbors = board.neighbors(row, col)
    flag_count = sum(
        1 for position in neighbors if board.get_cell(*position).is_flagged
    )
    if flag_count != cell.adjacent_mines:
        return EMPTY_RESULT

    result = EMPTY_RESULT
    for neighbor_row, neighbor_col in neighbors:
        result = result.merge(
            reveal(board, neighbor_row, neighbor_col, flags_block_cascade)
        )
    return result


# ============================================================================
# Flagging
# ============================================================================

def toggle_flag(board: Board, row: int, col: int) -> CellState:
    """
    Toggle the flag on a cell.

    Open cells are left untouched.

    Returns:
        The cell's state after the call.
    """
    cell = board.get_cell(row, col)
    cell.toggle_flag()
    return cell.state


# ============================================================================
# Evaluation
# ============================================================================

def evaluate(board: Board, last_reveal: RevealResult) -> GameStatus:
    """
    Decide the game status after a reveal.

    Returns:
        LOST if the reveal hit a mine, WON if every safe cell is open,
        PLAYING otherwise.
    """
    if last_reveal.hit_mine:
        return GameStatus.LOST
    if board.open_count == board.total_cells - board.num_mines:
        return GameStatus.WON
    return GameStatus.PLAYING
