"""
Game package initialization
"""

from .board import Board, Cell, CellState, Position, PositionOutOfBounds
from .generator import DIFFICULTIES, Difficulty, InvalidConfiguration, generate
from .reveal import RevealKind, RevealOutcome, chord, reveal_from
from .session import GamePhase, GameSession

__all__ = [
    'Board', 'Cell', 'CellState', 'Position', 'PositionOutOfBounds',
    'DIFFICULTIES', 'Difficulty', 'InvalidConfiguration', 'generate',
    'RevealKind', 'RevealOutcome', 'chord', 'reveal_from',
    'GamePhase', 'GameSession',
]
