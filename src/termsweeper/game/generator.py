"""
Minesweeper Game - Board Generation
Difficulty presets and first-click-safe mine placement
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Set

import numpy as np

from .board import Board, Position

logger = logging.getLogger(__name__)


class InvalidConfiguration(ValueError):
    """Board size or mine count that cannot produce a playable board"""


@dataclass(frozen=True)
class Difficulty:
    """Named board configuration (width x height with a fixed mine count)"""
    name: str
    width: int
    height: int
    mines: int

    @classmethod
    def custom(cls, width: int, height: int, mines: int) -> 'Difficulty':
        """
        Build a custom difficulty, checking it against board-size constraints

        The mine count must leave room for the first-click safe zone wherever
        the first click lands, i.e. outside a full 3x3 block (or the whole
        board when it is narrower than 3 cells).

        Raises:
            InvalidConfiguration: if the triple can never produce a board
        """
        if width < 1 or height < 1:
            raise InvalidConfiguration(f"board must be at least 1x1, got {width}x{height}")
        if mines < 0:
            raise InvalidConfiguration(f"mine count cannot be negative, got {mines}")
        total = width * height
        if mines >= total:
            raise InvalidConfiguration(
                f"{mines} mines do not fit on a {width}x{height} board ({total} cells)"
            )
        safe_zone = min(3, width) * min(3, height)
        if mines > total - safe_zone:
            raise InvalidConfiguration(
                f"at most {total - safe_zone} mines fit on a {width}x{height} board "
                f"with a safe first click, got {mines}"
            )
        return cls('custom', width, height, mines)


# Difficulty presets (width, height, mines)
DIFFICULTIES: Dict[str, Difficulty] = {
    'beginner': Difficulty('beginner', 9, 9, 10),
    'intermediate': Difficulty('intermediate', 16, 16, 40),
    'expert': Difficulty('expert', 30, 16, 99),
}


def safe_zone(width: int, height: int, excluded_cell: Position) -> Set[Position]:
    """The excluded cell plus its in-bounds neighbors"""
    row, col = excluded_cell
    zone = set()
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            nr, nc = row + dr, col + dc
            if 0 <= nr < height and 0 <= nc < width:
                zone.add((nr, nc))
    return zone


def count_adjacent(mines: np.ndarray) -> np.ndarray:
    """Number of mined neighbors for each cell of a boolean mine mask"""
    height, width = mines.shape
    padded = np.pad(mines.astype(np.int8), 1)
    counts = np.zeros((height, width), dtype=np.int8)
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            counts += padded[1 + dr:1 + dr + height, 1 + dc:1 + dc + width]
    return counts


def generate(width: int, height: int, mine_count: int, excluded_cell: Position,
             rng: Optional[np.random.Generator] = None) -> Board:
    """
    Generate a board whose mines avoid the first click and its neighbors

    Args:
        width: Number of columns
        height: Number of rows
        mine_count: Number of mines to place
        excluded_cell: (row, col) of the first click
        rng: numpy Generator to sample with (a fresh one when omitted)

    Returns:
        A generated Board with adjacency counts filled in

    Raises:
        InvalidConfiguration: if the mines cannot fit outside the safe zone
    """
    if width < 1 or height < 1:
        raise InvalidConfiguration(f"board must be at least 1x1, got {width}x{height}")
    if not 0 <= mine_count < width * height:
        raise InvalidConfiguration(
            f"mine count must be in [0, {width * height}), got {mine_count}"
        )
    row, col = excluded_cell
    if not (0 <= row < height and 0 <= col < width):
        raise InvalidConfiguration(f"first click {excluded_cell} is outside the board")

    zone = safe_zone(width, height, excluded_cell)
    eligible = np.array(
        [r * width + c for r in range(height) for c in range(width) if (r, c) not in zone],
        dtype=np.int64,
    )
    if mine_count > len(eligible):
        raise InvalidConfiguration(
            f"{mine_count} mines do not fit outside the {len(zone)}-cell safe zone "
            f"on a {width}x{height} board"
        )

    if rng is None:
        rng = np.random.default_rng()
    chosen = rng.choice(eligible, size=mine_count, replace=False)

    mask = np.zeros(height * width, dtype=bool)
    mask[chosen] = True
    mask = mask.reshape(height, width)
    counts = count_adjacent(mask)

    board = Board(width, height, mine_count)
    for cell in board.cells():
        if mask[cell.row, cell.col]:
            cell.place_mine()
        else:
            cell.adjacent_mines = int(counts[cell.row, cell.col])
    board.generated = True

    logger.debug("generated %dx%d board with %d mines, safe zone around %s",
                 width, height, mine_count, excluded_cell)
    return board
