"""
state.py - Game state representation for Four

This module implements the GameState class which holds the grid, its
dimensions and the move history. GameState is only ever mutated by
four.game.rules.make_turn.
"""

import numbers
from typing import List, Optional, Tuple

import numpy as np

from four.utils import EMPTY_COLOR, render_board_ascii, render_board_emoji

# (row, col, player_id)
Move = Tuple[int, int, int]


class GameState:
    """
    Represents the current state of a game.

    Attributes:
        grid: grid_height x grid_width array of player ids, EMPTY_COLOR where free
        grid_width: Number of columns, fixed for the lifetime of the state
        grid_height: Number of rows, fixed for the lifetime of the state
        history: Successful moves in chronological order
    """

    def __init__(self, grid: np.ndarray, history: Optional[List[Move]] = None):
        self.grid = grid
        self.grid_height, self.grid_width = grid.shape
        self.history: List[Move] = history if history is not None else []

    @staticmethod
    def init_state(width: int, height: int) -> Optional['GameState']:
        """
        Create the initial state for a grid of the given size.

        Args:
            width: Number of columns
            height: Number of rows

        Returns:
            An empty GameState, or None if either dimension is not a positive integer
        """
        if not _is_positive_int(width) or not _is_positive_int(height):
            return None

        grid = np.full((int(height), int(width)), EMPTY_COLOR, dtype=int)
        return GameState(grid)

    def is_terminal(self) -> Optional[int]:
        """Return the id of the player who won with the last move, or None."""
        from four.game.rules import is_terminal
        return is_terminal(self)

    def copy(self) -> 'GameState':
        """
        Create a deep copy of the current state.

        Returns:
            A new GameState with its own grid and history
        """
        return GameState(self.grid.copy(), list(self.history))

    @property
    def last_move(self) -> Optional[Move]:
        """Most recent (row, col, player_id) history entry, or None before the first move."""
        return self.history[-1] if self.history else None

    def render(self, plain: bool = False) -> str:
        """Render the grid with emoji glyphs, or plain ASCII if requested."""
        if plain:
            return render_board_ascii(self.grid)
        return render_board_emoji(self.grid)

    def __eq__(self, other) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return np.array_equal(self.grid, other.grid) and self.history == other.history

    def __repr__(self) -> str:
        return (f"GameState(grid_width={self.grid_width}, grid_height={self.grid_height}, "
                f"turns={len(self.history)})")

    def __str__(self) -> str:
        return self.render()


def init_state(width: int, height: int) -> Optional[GameState]:
    """Module-level alias of GameState.init_state."""
    return GameState.init_state(width, height)


def _is_positive_int(value) -> bool:
    # bool is an Integral but never a valid dimension
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value > 0
