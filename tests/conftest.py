"""
Shared test fixtures for four tests.
"""

from typing import Callable, Iterable, Tuple

import numpy as np
import pytest

from four.game.rules import make_turn
from four.game.state import GameState


# =============================================================================
# State Fixtures
# =============================================================================

@pytest.fixture
def state() -> GameState:
    """Empty 10x10 game, the size the console driver uses by default."""
    return GameState.init_state(10, 10)


@pytest.fixture
def classic_state() -> GameState:
    """Empty 7 wide, 6 high game."""
    return GameState.init_state(7, 6)


# =============================================================================
# Helpers
# =============================================================================

@pytest.fixture
def drop() -> Callable[[GameState, Iterable[Tuple[int, int]]], None]:
    """Apply (column, player) moves, failing the test on any rejected move."""
    def _drop(game: GameState, moves: Iterable[Tuple[int, int]]) -> None:
        for col, player in moves:
            err = make_turn(game, col, player)
            assert err is None, f"move ({col}, {player}) rejected: {err}"
    return _drop


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Build a state from explicit cells, with ``last`` as the only history entry."""
    def _make(width: int, height: int, cells: Iterable[Tuple[int, int]], player: int,
              last: Tuple[int, int]) -> GameState:
        grid = np.zeros((height, width), dtype=int)
        for row, col in cells:
            grid[row, col] = player
        return GameState(grid, [(last[0], last[1], player)])
    return _make
