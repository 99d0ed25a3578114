"""
Minesweeper Game - Reveal Engine
Flood-fill reveal and chording over a Board
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from .board import Board, CellState, Position


class RevealKind(Enum):
    """Result category of a reveal or chord"""
    HIT_MINE = "hit_mine"
    CLEARED = "cleared"
    NO_OP = "no_op"


@dataclass(frozen=True)
class RevealOutcome:
    """What a reveal did to the board"""
    kind: RevealKind
    revealed: FrozenSet[Position] = frozenset()
    mine: Optional[Position] = None

    @property
    def hit_mine(self) -> bool:
        return self.kind == RevealKind.HIT_MINE


NO_OP = RevealOutcome(RevealKind.NO_OP)


def reveal_from(board: Board, pos: Position) -> RevealOutcome:
    """
    Reveal the cell at pos, flooding outwards through zero-adjacency cells

    Flagged cells are never revealed, neither directly nor by the flood.
    Question-marked cells are treated like hidden ones.
    """
    row, col = pos
    cell = board.get_cell(row, col)
    if cell.state in (CellState.REVEALED, CellState.FLAGGED):
        return NO_OP

    if cell.is_mine:
        cell.reveal()
        return RevealOutcome(RevealKind.HIT_MINE, frozenset([pos]), mine=pos)

    revealed = set()
    queue = deque([pos])
    while queue:
        r, c = queue.popleft()
        current = board.board[r][c]
        if not current.reveal():
            continue
        revealed.add((r, c))
        if current.adjacent_mines == 0:
            for nr, nc in board.neighbors(r, c):
                neighbor = board.board[nr][nc]
                if neighbor.state in (CellState.HIDDEN, CellState.QUESTION) and not neighbor.is_mine:
                    queue.append((nr, nc))

    return RevealOutcome(RevealKind.CLEARED, frozenset(revealed))


def chord(board: Board, pos: Position) -> RevealOutcome:
    """
    Reveal all unflagged neighbors of a revealed number whose flags are satisfied

    Only legal on a revealed cell with a non-zero count; anything else, or a
    flag count that does not match the number, leaves the board unchanged.
    """
    row, col = pos
    cell = board.get_cell(row, col)
    if not cell.is_revealed() or cell.is_mine or cell.adjacent_mines == 0:
        return NO_OP

    neighbors = sorted(board.neighbors(row, col))
    flags = sum(1 for nr, nc in neighbors if board.board[nr][nc].is_flagged())
    if flags != cell.adjacent_mines:
        return NO_OP

    revealed = set()
    mine = None
    for neighbor in neighbors:
        outcome = reveal_from(board, neighbor)
        revealed |= outcome.revealed
        if outcome.hit_mine and mine is None:
            mine = outcome.mine

    if mine is not None:
        return RevealOutcome(RevealKind.HIT_MINE, frozenset(revealed), mine=mine)
    if not revealed:
        return NO_OP
    return RevealOutcome(RevealKind.CLEARED, frozenset(revealed))
