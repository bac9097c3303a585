"""
rules.py - Turn application and win detection for Four

This module provides the pure functions that operate on a GameState:
1. Gravity placement (trace_row_coordinate) and move application (make_turn)
2. Line scanning (check_line) and terminal detection (is_terminal)

Failures are returned as values, never raised.
"""

import numbers
from enum import Enum
from typing import List, Optional

import numpy as np

from four.game.state import GameState
from four.utils import (EMPTY_COLOR, LINE_LEN, LINE_OFFSET, LINE_STEPS,
                        DIRECTION_VECTORS, is_valid_position)


class TurnError(str, Enum):
    """Reasons a move is rejected. Members compare equal to their messages."""
    INVALID_COLUMN = "column index is outside of the grid range"
    COLUMN_FULL = "token cannot be placed in a given column as it's full or does not exist"

    def __str__(self) -> str:
        return self.value


def _is_valid_column(state: GameState, col) -> bool:
    # Negative indices would silently wrap on a numpy grid
    return (isinstance(col, numbers.Integral) and not isinstance(col, bool)
            and 0 <= col < state.grid_width)


def check_line(state: GameState, start_row: int, start_col: int,
               inc_row: int, inc_col: int, steps: int, player_id: int) -> bool:
    """
    Check whether a line contains LINE_LEN consecutive tokens of one player.

    Scans up to ``steps`` cells from (start_row, start_col), moving by
    (inc_row, inc_col) after each cell. Any cell not owned by ``player_id``
    resets the run. The scan stops as soon as the cursor leaves the grid.

    Args:
        state: The game state to inspect
        start_row: Row of the first scanned cell
        start_col: Column of the first scanned cell
        inc_row: Row increment per step
        inc_col: Column increment per step
        steps: Maximum number of cells to scan
        player_id: The player whose run is counted

    Returns:
        True as soon as the run reaches LINE_LEN, False otherwise
    """
    row, col = start_row, start_col
    run = 0

    for _ in range(steps):
        if not is_valid_position(row, col, state.grid_height, state.grid_width):
            return False

        if state.grid[row, col] == player_id:
            run += 1
        else:
            run = 0

        if run == LINE_LEN:
            return True

        row += inc_row
        col += inc_col

    return False


def _backtrack(state: GameState, row: int, col: int, inc_row: int, inc_col: int) -> int:
    """Number of cells (at most LINE_OFFSET) the scan can back up without leaving the grid."""
    limit = LINE_OFFSET
    if inc_row > 0:
        limit = min(limit, row)
    elif inc_row < 0:
        limit = min(limit, state.grid_height - 1 - row)
    if inc_col > 0:
        limit = min(limit, col)
    elif inc_col < 0:
        limit = min(limit, state.grid_width - 1 - col)
    return max(limit, 0)


def is_terminal(state: GameState) -> Optional[int]:
    """
    Determine whether the last move won the game.

    Only lines through the most recently placed token are checked: a new run
    of LINE_LEN must include the cell that was just filled.

    Args:
        state: The game state to inspect

    Returns:
        The winning player id, or None if there is no winner yet
    """
    if not state.history:
        return None

    row, col, player_id = state.history[-1]

    for inc_row, inc_col in DIRECTION_VECTORS.values():
        # Back up along the line, clamped to the grid edge
        back = _backtrack(state, row, col, inc_row, inc_col)
        start_row = row - back * inc_row
        start_col = col - back * inc_col

        if check_line(state, start_row, start_col, inc_row, inc_col, LINE_STEPS, player_id):
            return player_id

    return None


def trace_row_coordinate(state: GameState, col: int) -> Optional[int]:
    """
    Find the row a token dropped into ``col`` would land on.

    Args:
        state: The game state to inspect
        col: Column index

    Returns:
        The lowest empty row in the column, or None if the column is full or invalid
    """
    if not _is_valid_column(state, col):
        return None

    for row in range(state.grid_height - 1, -1, -1):
        if state.grid[row, col] == EMPTY_COLOR:
            return row

    return None


def make_turn(state: GameState, col: int, player_id: int) -> Optional[TurnError]:
    """
    Drop a token for ``player_id`` into ``col``.

    Turn order, player identity and whether the game is already over are not
    checked here; that is up to the caller.

    Args:
        state: The game state to update
        col: Column index
        player_id: Id of the player placing the token (never EMPTY_COLOR)

    Returns:
        None on success, otherwise the TurnError describing why the move was
        rejected. A rejected move leaves the state untouched.
    """
    if not _is_valid_column(state, col):
        return TurnError.INVALID_COLUMN

    row = trace_row_coordinate(state, col)
    if row is None:
        return TurnError.COLUMN_FULL

    state.grid[row, col] = player_id
    state.history.append((row, int(col), player_id))

    return None


def valid_columns(state: GameState) -> List[int]:
    """
    Get the columns that can still take a token.

    Returns:
        List of column indices with a landing row
    """
    return [col for col in range(state.grid_width) if state.grid[0, col] == EMPTY_COLOR]


def is_full(state: GameState) -> bool:
    """Check whether every cell of the grid is occupied."""
    return not np.any(state.grid == EMPTY_COLOR)
