"""
Minesweeper Game - Board State
Grid of cells and the per-cell mutations the reveal engine and session build on
"""

from enum import Enum
from typing import Iterator, List, Set, Tuple

Position = Tuple[int, int]


class PositionOutOfBounds(IndexError):
    """Raised when a coordinate outside the board is accessed"""

    def __init__(self, row: int, col: int, height: int, width: int):
        super().__init__(f"position ({row}, {col}) is outside a {height}x{width} board")
        self.row = row
        self.col = col


class CellState(Enum):
    """Enumeration for cell visibility"""
    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"
    QUESTION = "question"


class Cell:
    """Represents a single cell on the minesweeper board"""

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        self.is_mine = False
        self.state = CellState.HIDDEN
        self.adjacent_mines = 0

    def __repr__(self):
        return f"Cell({self.row}, {self.col}, mine={self.is_mine}, state={self.state.value})"

    def place_mine(self):
        """Place a mine in this cell"""
        self.is_mine = True

    def reveal(self) -> bool:
        """Reveal this cell; flagged and already revealed cells are left alone"""
        if self.state in (CellState.HIDDEN, CellState.QUESTION):
            self.state = CellState.REVEALED
            return True
        return False

    def toggle_flag(self) -> bool:
        """Toggle flag state on this cell; returns False on a revealed cell"""
        if self.state in (CellState.HIDDEN, CellState.QUESTION):
            self.state = CellState.FLAGGED
        elif self.state == CellState.FLAGGED:
            self.state = CellState.HIDDEN
        else:
            return False
        return True

    def toggle_question(self) -> bool:
        """Toggle the question mark on this cell; returns False on a revealed cell"""
        if self.state in (CellState.HIDDEN, CellState.FLAGGED):
            self.state = CellState.QUESTION
        elif self.state == CellState.QUESTION:
            self.state = CellState.HIDDEN
        else:
            return False
        return True

    def is_revealed(self) -> bool:
        """Check if cell is revealed"""
        return self.state == CellState.REVEALED

    def is_flagged(self) -> bool:
        """Check if cell is flagged"""
        return self.state == CellState.FLAGGED

    def is_question(self) -> bool:
        """Check if cell carries a question mark"""
        return self.state == CellState.QUESTION


class Board:
    """
    Grid of cells with its dimensions and mine count.

    A board built directly is a placeholder: every cell hidden, no mines, and
    ``generated`` False. Boards with mines come from ``generator.generate``.
    """

    def __init__(self, width: int, height: int, mine_count: int):
        self.width = width
        self.height = height
        self.mine_count = mine_count
        self.generated = False
        self.board: List[List[Cell]] = [
            [Cell(row, col) for col in range(width)] for row in range(height)
        ]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at specified position"""
        if not self.in_bounds(row, col):
            raise PositionOutOfBounds(row, col, self.height, self.width)
        return self.board[row][col]

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell, row by row"""
        for board_row in self.board:
            yield from board_row

    def neighbors(self, row: int, col: int) -> Set[Position]:
        """Positions of the up-to-8 cells surrounding (row, col)"""
        if not self.in_bounds(row, col):
            raise PositionOutOfBounds(row, col, self.height, self.width)
        result = set()
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, col + dc
                if self.in_bounds(nr, nc):
                    result.add((nr, nc))
        return result

    def reveal_cell(self, row: int, col: int) -> bool:
        """
        Reveal a single cell without any propagation.
        Returns True if the cell changed state.
        """
        return self.get_cell(row, col).reveal()

    def toggle_flag(self, row: int, col: int) -> bool:
        return self.get_cell(row, col).toggle_flag()

    def toggle_question_mark(self, row: int, col: int) -> bool:
        return self.get_cell(row, col).toggle_question()

    def flag_count(self) -> int:
        return sum(1 for cell in self.cells() if cell.is_flagged())

    def revealed_count(self) -> int:
        return sum(1 for cell in self.cells() if cell.is_revealed())

    def mine_positions(self) -> Set[Position]:
        return {(cell.row, cell.col) for cell in self.cells() if cell.is_mine}

    def all_safe_revealed(self) -> bool:
        """Check if every non-mine cell has been revealed (win condition)"""
        return all(cell.is_revealed() for cell in self.cells() if not cell.is_mine)
