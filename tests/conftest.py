"""
Shared fixtures: boards with known mine layouts and a controllable clock
"""

import numpy as np
import pytest

from termsweeper.game import Board, GamePhase, GameSession
from termsweeper.game.generator import Difficulty, count_adjacent


class FakeClock:
    """Monotonic clock that only moves when told to"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def build_board(width, height, mines):
    """Generated-looking board with mines exactly at the given (row, col) positions"""
    board = Board(width, height, len(mines))
    mask = np.zeros((height, width), dtype=bool)
    for row, col in mines:
        mask[row, col] = True
    counts = count_adjacent(mask)
    for cell in board.cells():
        if mask[cell.row, cell.col]:
            cell.place_mine()
        else:
            cell.adjacent_mines = int(counts[cell.row, cell.col])
    board.generated = True
    return board


def start_session(width, height, mines, clock=None, use_question_marks=False):
    """RUNNING session over a fixed layout, as if the first click already happened"""
    clock = clock or FakeClock()
    session = GameSession(Difficulty('custom', width, height, len(mines)),
                          rng=np.random.default_rng(0), clock=clock,
                          use_question_marks=use_question_marks)
    session.board = build_board(width, height, mines)
    session.phase = GamePhase.RUNNING
    session.start_time = clock()
    return session


def snapshot(board):
    return [[cell.state for cell in row] for row in board.board]


@pytest.fixture
def clock():
    return FakeClock()
