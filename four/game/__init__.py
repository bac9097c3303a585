"""
four.game - Core game mechanics for Four

This package contains the game state, turn application and win detection.
"""

from four.game.state import GameState, init_state
from four.game.rules import (TurnError, check_line, is_terminal, is_full,
                             make_turn, trace_row_coordinate, valid_columns)

__all__ = ['GameState', 'init_state', 'TurnError', 'check_line', 'is_terminal',
           'is_full', 'make_turn', 'trace_row_coordinate', 'valid_columns']
