"""
Terminal Minesweeper
"""

__version__ = "1.0.0"
