"""
Renderer - draws a game session as a text grid
Building a frame only reads the session; painting writes a frame to a curses window
"""

import curses
from dataclasses import dataclass
from enum import Enum
from typing import Dict, NamedTuple, Tuple

from ..game import CellState, GamePhase, GameSession
from .input_mapper import BoardLayout


class Style(Enum):
    """Visual role of a span; mapped to curses attributes when painting"""
    DEFAULT = "default"
    HEADER = "header"
    BORDER = "border"
    HIDDEN = "hidden"
    EMPTY = "empty"
    FLAG = "flag"
    QUESTION = "question"
    MINE = "mine"
    EXPLODED = "exploded"
    WRONG_FLAG = "wrong_flag"
    WON = "won"
    LOST = "lost"
    HINT = "hint"
    N1 = 1
    N2 = 2
    N3 = 3
    N4 = 4
    N5 = 5
    N6 = 6
    N7 = 7
    N8 = 8


NUMBER_STYLES = (Style.N1, Style.N2, Style.N3, Style.N4,
                 Style.N5, Style.N6, Style.N7, Style.N8)


class Span(NamedTuple):
    text: str
    style: Style = Style.DEFAULT
    cursor: bool = False


Line = Tuple[Span, ...]
Frame = Tuple[Line, ...]


@dataclass(frozen=True)
class Glyphs:
    """Characters used for cells and the board frame"""
    hidden: str
    mine: str
    flag: str
    question: str = '?'
    wrong_flag: str = 'X'
    empty: str = ' '
    horizontal: str = '-'
    vertical: str = '|'
    corners: str = '++++'


UNICODE_GLYPHS = Glyphs(hidden='■', mine='☼', flag='⚑',
                        horizontal='─', vertical='│', corners='┌┐└┘')
ASCII_GLYPHS = Glyphs(hidden='#', mine='*', flag='F')

# Row of the top board border; cells start one row and one column inside it
BOARD_TOP = 2

HINT = "arrows/wasd move  space reveal  f flag  c chord  n new  ? help  q quit"

HELP_LINES = (
    "Controls",
    "",
    "  Arrows | WASD | hjkl      move cursor",
    "  Space | Enter | L-click   reveal",
    "  F | R-click               toggle flag",
    "  C | M-click | dbl-click   chord (open neighbors)",
    "  N | F2                    new game",
    "  1 / 2 / 3                 beginner / intermediate / expert",
    "  ? | F1                    close this help",
    "  Q | Esc                   quit",
)


def board_layout(session: GameSession) -> BoardLayout:
    """Screen placement of the session's board inside a rendered frame"""
    return BoardLayout(origin_y=BOARD_TOP + 1, origin_x=1,
                       rows=session.board.height, cols=session.board.width)


def required_size(rows: int, cols: int) -> Tuple[int, int]:
    """Minimum (lines, columns) a terminal needs to show a rows x cols board"""
    lines = max(rows + BOARD_TOP + 4, len(HELP_LINES) + 2)
    width = max(cols * 2 + 3, 40)
    return lines, width


def render_cell(session: GameSession, row: int, col: int, glyphs: Glyphs) -> Span:
    cell = session.board.board[row][col]
    lost = session.phase == GamePhase.LOST
    if cell.state == CellState.REVEALED:
        if cell.is_mine:
            style = Style.EXPLODED if session.exploded == (row, col) else Style.MINE
            glyph = glyphs.mine
        elif cell.adjacent_mines > 0:
            style = NUMBER_STYLES[cell.adjacent_mines - 1]
            glyph = str(cell.adjacent_mines)
        else:
            style, glyph = Style.EMPTY, glyphs.empty
    elif cell.state == CellState.FLAGGED:
        if lost and not cell.is_mine:
            style, glyph = Style.WRONG_FLAG, glyphs.wrong_flag
        else:
            style, glyph = Style.FLAG, glyphs.flag
    elif cell.state == CellState.QUESTION:
        style, glyph = Style.QUESTION, glyphs.question
    else:
        style, glyph = Style.HIDDEN, glyphs.hidden
    return Span(' ' + glyph, style, cursor=session.cursor == (row, col))


def render_header(session: GameSession) -> Line:
    difficulty = session.difficulty
    text = (f"Mines: {session.remaining_mines():>3}   Time: {min(session.elapsed_time, 999):>3}   "
            f"{difficulty.name.title()} {difficulty.width}x{difficulty.height}")
    return (Span(text, Style.HEADER),)


def render_banner(session: GameSession) -> Line:
    if session.phase == GamePhase.WON:
        return (Span(f"Cleared in {session.elapsed_time}s! Press n for a new game.", Style.WON),)
    if session.phase == GamePhase.LOST:
        return (Span("Boom! You hit a mine. Press n for a new game.", Style.LOST),)
    if session.phase == GamePhase.NOT_STARTED:
        return (Span("Reveal any cell to start.", Style.HINT),)
    return ()


def render_frame(session: GameSession, glyphs: Glyphs = UNICODE_GLYPHS,
                 show_help: bool = False) -> Frame:
    """
    Build the full screen for a session

    The result is a plain comparable value, so the caller can skip painting
    when nothing visible changed.
    """
    header = render_header(session)
    if show_help:
        return (header, ()) + tuple((Span(text),) for text in HELP_LINES)

    board = session.board
    top_left, top_right, bottom_left, bottom_right = glyphs.corners
    rule = glyphs.horizontal * (board.width * 2 + 1)
    lines = [header, (), (Span(top_left + rule + top_right, Style.BORDER),)]
    for row in range(board.height):
        spans = [Span(glyphs.vertical, Style.BORDER)]
        spans.extend(render_cell(session, row, col, glyphs) for col in range(board.width))
        spans.append(Span(' ' + glyphs.vertical, Style.BORDER))
        lines.append(tuple(spans))
    lines.append((Span(bottom_left + rule + bottom_right, Style.BORDER),))
    lines.append(render_banner(session))
    lines.append((Span(HINT, Style.HINT),))
    return tuple(lines)


def paint(window, frame: Frame, attrs: Dict[Style, int]):
    """Write a frame to a curses window, clipping anything that does not fit"""
    window.erase()
    height, width = window.getmaxyx()
    for y, line in enumerate(frame):
        if y >= height:
            break
        x = 0
        for span in line:
            if x >= width:
                break
            attr = attrs.get(span.style, curses.A_NORMAL)
            if span.cursor:
                attr |= curses.A_REVERSE
            try:
                window.addnstr(y, x, span.text, width - x, attr)
            except curses.error:
                # writing the bottom-right cell moves the cursor off screen
                pass
            x += len(span.text)
    window.refresh()
