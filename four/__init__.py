"""
four - Rules engine for a Connect-Four-style game

This package provides the game state model, gravity placement and
four-in-a-row detection, plus a small console driver for playing it.
"""

# Version number
__version__ = '0.1.0'
