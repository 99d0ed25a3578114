"""
Minesweeper Game - Main Entry Point
Classic minesweeper in the terminal
"""

import sys
import os

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from termsweeper.cli import main


if __name__ == "__main__":
    sys.exit(main())
