#!/usr/bin/env python3
"""
run.py - Main entry point for the Four game

Examples:
    echo "0 0 1 1 2 2 3" | python run.py play
    python run.py show --moves 3,3,4,4,5,5,6 --width 7 --height 6 --ascii
    python run.py benchmark --iterations 500 --seed 1
"""

import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from four.interfaces.cli import main


if __name__ == "__main__":
    sys.exit(main())
