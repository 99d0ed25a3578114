"""
Input Mapper - translates terminal events into game commands
Holds no game state; every call is a pure function of its arguments
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..game import DIFFICULTIES, Difficulty, Position


class MouseButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


class ClickType(Enum):
    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True)
class KeyEvent:
    """A key press; printable keys are one-char strings, others are names like 'UP' or 'F2'"""
    key: str


@dataclass(frozen=True)
class MouseEvent:
    """A mouse click at screen column x, screen row y"""
    x: int
    y: int
    button: MouseButton
    click: ClickType = ClickType.SINGLE


@dataclass(frozen=True)
class TickEvent:
    """Input poll timed out"""


Event = Union[KeyEvent, MouseEvent, TickEvent]


@dataclass(frozen=True)
class MoveCursor:
    drow: int
    dcol: int


@dataclass(frozen=True)
class RevealAt:
    pos: Position


@dataclass(frozen=True)
class FlagAt:
    pos: Position


@dataclass(frozen=True)
class ChordAt:
    pos: Position


@dataclass(frozen=True)
class NewGame:
    difficulty: Optional[Difficulty] = None


@dataclass(frozen=True)
class ToggleHelp:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Tick:
    pass


Command = Union[MoveCursor, RevealAt, FlagAt, ChordAt, NewGame, ToggleHelp, Quit, Tick]


@dataclass(frozen=True)
class BoardLayout:
    """Where the board sits on screen and how many characters a cell takes"""
    origin_y: int
    origin_x: int
    rows: int
    cols: int
    cell_width: int = 2
    cell_height: int = 1

    def to_board(self, x: int, y: int) -> Optional[Position]:
        """Screen coordinates to (row, col), or None when off the board"""
        dx = x - self.origin_x
        dy = y - self.origin_y
        if dx < 0 or dy < 0:
            return None
        row, col = dy // self.cell_height, dx // self.cell_width
        if row >= self.rows or col >= self.cols:
            return None
        return (row, col)

    def to_screen(self, row: int, col: int):
        """(y, x) of the first character of a cell"""
        return (self.origin_y + row * self.cell_height, self.origin_x + col * self.cell_width)


MOVES = {
    'UP': (-1, 0), 'DOWN': (1, 0), 'LEFT': (0, -1), 'RIGHT': (0, 1),
    'w': (-1, 0), 's': (1, 0), 'a': (0, -1), 'd': (0, 1),
    'W': (-1, 0), 'S': (1, 0), 'A': (0, -1), 'D': (0, 1),
    'k': (-1, 0), 'j': (1, 0), 'h': (0, -1), 'l': (0, 1),
}

PRESET_KEYS = {
    '1': 'beginner',
    '2': 'intermediate',
    '3': 'expert',
}


def map_key(key: str, cursor: Position) -> Optional[Command]:
    if key in MOVES:
        return MoveCursor(*MOVES[key])
    if key in ('ENTER', ' '):
        return RevealAt(cursor)
    if key.lower() == 'f':
        return FlagAt(cursor)
    if key.lower() == 'c':
        return ChordAt(cursor)
    if key in ('n', 'N', 'F2'):
        return NewGame()
    if key in PRESET_KEYS:
        return NewGame(DIFFICULTIES[PRESET_KEYS[key]])
    if key in ('?', 'F1'):
        return ToggleHelp()
    if key in ('q', 'Q', 'ESC'):
        return Quit()
    return None


def map_mouse(event: MouseEvent, layout: BoardLayout) -> Optional[Command]:
    pos = layout.to_board(event.x, event.y)
    if pos is None:
        return None
    if event.button == MouseButton.RIGHT:
        return FlagAt(pos)
    if event.button == MouseButton.MIDDLE or event.click == ClickType.DOUBLE:
        return ChordAt(pos)
    return RevealAt(pos)


def map_event(event: Event, cursor: Position, layout: BoardLayout) -> Optional[Command]:
    """
    Translate one raw event into a command

    Args:
        event: Key, mouse or tick event
        cursor: Current keyboard cursor, the target of key commands
        layout: Board placement used to resolve mouse coordinates

    Returns:
        The command, or None for events with no meaning (unknown keys,
        clicks outside the board)
    """
    if isinstance(event, TickEvent):
        return Tick()
    if isinstance(event, KeyEvent):
        return map_key(event.key, cursor)
    if isinstance(event, MouseEvent):
        return map_mouse(event, layout)
    return None
