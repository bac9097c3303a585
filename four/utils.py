"""
utils.py - Constants, enumerations and helper functions for Four

This module provides the game constants, the player enumeration, direction
vectors used by the line scanner, and the board renderers used by the driver.
"""

from enum import Enum, auto
from typing import Dict, Tuple

import numpy as np

# Game constants
EMPTY_COLOR = 0
LINE_LEN = 4                    # Number of tokens in a row to win
LINE_OFFSET = LINE_LEN - 1      # How far the scan backs up from the played cell
LINE_STEPS = LINE_LEN * 2 - 1   # Window covering every run through the played cell

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = EMPTY_COLOR
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY


# Player ids in turn order
PLAYERS = (Player.ONE.value, Player.TWO.value)


class Direction(Enum):
    """Enumeration representing the lines checked through the last token."""
    VERTICAL = auto()
    HORIZONTAL = auto()
    DIAGONAL_DOWN = auto()  # Top-left to bottom-right
    DIAGONAL_UP = auto()    # Top-right to bottom-left


# Direction vectors (row, col), in the order lines are checked
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.VERTICAL: (1, 0),
    Direction.HORIZONTAL: (0, 1),
    Direction.DIAGONAL_DOWN: (1, 1),
    Direction.DIAGONAL_UP: (1, -1),
}

EMOJI_GLYPHS = {
    Player.EMPTY.value: "⬜️",
    Player.ONE.value: "🟢",
    Player.TWO.value: "🔴",
}

ASCII_GLYPHS = {
    Player.EMPTY.value: ".",
    Player.ONE.value: "X",
    Player.TWO.value: "O",
}


def is_valid_position(row: int, col: int, height: int, width: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        height: Number of rows on the board
        width: Number of columns on the board

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < height and 0 <= col < width


def render_board_emoji(grid: np.ndarray) -> str:
    """Render the grid one row per line, each glyph followed by a space."""
    lines = []
    for row in grid:
        lines.append("".join(EMOJI_GLYPHS.get(int(cell), "?") + " " for cell in row))
    return "\n".join(lines)


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        grid: The game grid

    Returns:
        ASCII representation of the board with column numbers underneath
    """
    width = grid.shape[1]
    # Column labels are single characters, so wide boards use the last digit
    border = "|" + "-" * (width * 2 - 1) + "|"

    result = [border]
    for row in grid:
        result.append("|" + " ".join(ASCII_GLYPHS.get(int(cell), "?") for cell in row) + "|")
    result.append(border)
    result.append("|" + " ".join(str(i % 10) for i in range(width)) + "|")

    return "\n".join(result)
