"""
four.interfaces - User interfaces for Four

This package contains the console driver that reads moves and renders the game.
"""

# Don't import anything here to avoid circular imports
__all__ = []
