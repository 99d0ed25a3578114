"""
Minesweeper Game - Game Session
Phase state machine, timer and mine counter around one board
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

import numpy as np

from .board import Board, CellState, Position
from .generator import DIFFICULTIES, Difficulty, generate
from .reveal import NO_OP, RevealKind, RevealOutcome, chord, reveal_from

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Enumeration for the coarse game phases"""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    WON = "won"
    LOST = "lost"


class GameSession:
    """
    One game in progress: owns the board, the keyboard cursor and the timer

    The board is a hidden placeholder until the first reveal, which generates
    the real layout around the clicked cell.
    """

    def __init__(self, difficulty: Difficulty = DIFFICULTIES['beginner'],
                 rng: Optional[np.random.Generator] = None,
                 clock: Callable[[], float] = time.monotonic,
                 use_question_marks: bool = False):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock
        self.use_question_marks = use_question_marks
        self.new_game(difficulty)

    def new_game(self, difficulty: Optional[Difficulty] = None):
        """Reset to NOT_STARTED with a fresh board, optionally switching difficulty"""
        if difficulty is not None:
            self.difficulty = difficulty
        self.board = Board(self.difficulty.width, self.difficulty.height, self.difficulty.mines)
        self.phase = GamePhase.NOT_STARTED
        self.flags_placed = 0
        self.elapsed_time = 0
        self.start_time: Optional[float] = None
        self.exploded: Optional[Position] = None
        self.cursor: Position = (self.difficulty.height // 2, self.difficulty.width // 2)
        logger.info("new %s game (%dx%d, %d mines)", self.difficulty.name,
                    self.difficulty.width, self.difficulty.height, self.difficulty.mines)

    @property
    def is_over(self) -> bool:
        return self.phase in (GamePhase.WON, GamePhase.LOST)

    def remaining_mines(self) -> int:
        """Mines left to flag; negative when more flags than mines are placed"""
        return self.difficulty.mines - self.flags_placed

    def reveal(self, pos: Position) -> RevealOutcome:
        """Reveal a cell, generating the board on the first reveal"""
        if self.is_over:
            return NO_OP
        if self.phase == GamePhase.NOT_STARTED:
            self.board.get_cell(*pos)
            self.board = generate(self.difficulty.width, self.difficulty.height,
                                  self.difficulty.mines, pos, self.rng)
            self.phase = GamePhase.RUNNING
            self.start_time = self.clock()
            self.elapsed_time = 0
        return self._apply(reveal_from(self.board, pos))

    def chord(self, pos: Position) -> RevealOutcome:
        """Chord on a revealed number"""
        if self.phase != GamePhase.RUNNING:
            return NO_OP
        return self._apply(chord(self.board, pos))

    def toggle_flag(self, pos: Position) -> bool:
        """
        Cycle the mark on a hidden cell

        Without question marks the cycle is hidden <-> flagged, with them it is
        hidden -> flagged -> question -> hidden. Returns True if anything changed.
        """
        if self.phase != GamePhase.RUNNING:
            return False
        row, col = pos
        cell = self.board.get_cell(row, col)
        if cell.state == CellState.REVEALED:
            return False

        if cell.state == CellState.FLAGGED:
            if self.use_question_marks:
                self.board.toggle_question_mark(row, col)
            else:
                self.board.toggle_flag(row, col)
            self.flags_placed -= 1
        elif cell.state == CellState.QUESTION:
            self.board.toggle_question_mark(row, col)
        else:
            self.board.toggle_flag(row, col)
            self.flags_placed += 1
        return True

    def move_cursor(self, drow: int, dcol: int):
        """Move the keyboard cursor, clamped to the board"""
        row, col = self.cursor
        row = min(max(row + drow, 0), self.board.height - 1)
        col = min(max(col + dcol, 0), self.board.width - 1)
        self.cursor = (row, col)

    def tick(self) -> bool:
        """Refresh elapsed_time; returns True when the shown second changed"""
        if self.phase != GamePhase.RUNNING or self.start_time is None:
            return False
        elapsed = int(self.clock() - self.start_time)
        if elapsed == self.elapsed_time:
            return False
        self.elapsed_time = elapsed
        return True

    def _apply(self, outcome: RevealOutcome) -> RevealOutcome:
        if outcome.kind == RevealKind.HIT_MINE:
            self.tick()
            self.exploded = outcome.mine
            self.phase = GamePhase.LOST
            self._reveal_all_mines()
            logger.info("mine hit at %s after %ds", outcome.mine, self.elapsed_time)
        elif outcome.kind == RevealKind.CLEARED and self.board.all_safe_revealed():
            self.tick()
            self.phase = GamePhase.WON
            self._flag_all_mines()
            logger.info("board cleared in %ds", self.elapsed_time)
        return outcome

    def _reveal_all_mines(self):
        """Reveal all unflagged mines when the game is lost"""
        for cell in self.board.cells():
            if cell.is_mine and not cell.is_flagged():
                cell.state = CellState.REVEALED

    def _flag_all_mines(self):
        """Flag all mines when the game is won"""
        for cell in self.board.cells():
            if cell.is_mine and not cell.is_flagged():
                cell.state = CellState.FLAGGED
                self.flags_placed += 1
