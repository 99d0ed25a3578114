"""
Terminal front end - curses input/render loop
Single-threaded: poll input with a short timeout, apply the command, repaint on change
"""

import curses
import logging
from typing import Dict, Optional

from ..game import GameSession
from .input_mapper import (
    ChordAt, ClickType, Command, Event, FlagAt, KeyEvent, MouseButton, MouseEvent,
    MoveCursor, NewGame, Quit, RevealAt, Tick, TickEvent, ToggleHelp, map_event,
)
from .renderer import (
    NUMBER_STYLES, UNICODE_GLYPHS, Frame, Glyphs, Style, board_layout, paint,
    render_frame, required_size,
)

logger = logging.getLogger(__name__)

# Poll interval; a timeout becomes a tick that refreshes the timer
TICK_MS = 200

KEY_NAMES = {
    curses.KEY_UP: 'UP',
    curses.KEY_DOWN: 'DOWN',
    curses.KEY_LEFT: 'LEFT',
    curses.KEY_RIGHT: 'RIGHT',
    curses.KEY_ENTER: 'ENTER',
    10: 'ENTER',
    13: 'ENTER',
    27: 'ESC',
    curses.KEY_F1: 'F1',
    curses.KEY_F2: 'F2',
}

# A press and release inside the click interval arrive merged as CLICKED;
# a slower click only reports the release. Presses are never subscribed.
MOUSE_MASK = (curses.BUTTON1_CLICKED | curses.BUTTON1_DOUBLE_CLICKED | curses.BUTTON1_RELEASED
              | curses.BUTTON2_CLICKED | curses.BUTTON2_RELEASED
              | curses.BUTTON3_CLICKED | curses.BUTTON3_RELEASED)

ESC_DELAY_MS = 25

# Colors for different numbers
NUMBER_COLORS = {
    1: curses.COLOR_BLUE,
    2: curses.COLOR_GREEN,
    3: curses.COLOR_RED,
    4: curses.COLOR_MAGENTA,
    5: curses.COLOR_RED,
    6: curses.COLOR_CYAN,
    7: curses.COLOR_WHITE,
    8: curses.COLOR_WHITE,
}


class TerminalTooSmall(Exception):
    """The terminal cannot fit the board"""

    def __init__(self, needed, actual):
        super().__init__(
            f"terminal is {actual[1]}x{actual[0]}, the board needs at least {needed[1]}x{needed[0]}"
        )
        self.needed = needed
        self.actual = actual


def translate_key(key: int) -> Optional[Event]:
    """Raw curses key code to an event; None for codes with no meaning"""
    if key == -1:
        return TickEvent()
    if key in KEY_NAMES:
        return KeyEvent(KEY_NAMES[key])
    if 32 <= key < 127:
        return KeyEvent(chr(key))
    return None


def translate_mouse(x: int, y: int, bstate: int) -> Optional[MouseEvent]:
    """Curses mouse state to an event; clicks and releases count, presses and wheel do not"""
    if bstate & curses.BUTTON1_DOUBLE_CLICKED:
        return MouseEvent(x, y, MouseButton.LEFT, ClickType.DOUBLE)
    if bstate & (curses.BUTTON1_CLICKED | curses.BUTTON1_RELEASED):
        return MouseEvent(x, y, MouseButton.LEFT)
    if bstate & (curses.BUTTON2_CLICKED | curses.BUTTON2_RELEASED):
        return MouseEvent(x, y, MouseButton.MIDDLE)
    if bstate & (curses.BUTTON3_CLICKED | curses.BUTTON3_RELEASED):
        return MouseEvent(x, y, MouseButton.RIGHT)
    return None


def init_attrs() -> Dict[Style, int]:
    """Curses attributes for each style, with colors when the terminal has them"""
    attrs = {
        Style.HEADER: curses.A_BOLD,
        Style.MINE: curses.A_BOLD,
        Style.EXPLODED: curses.A_BOLD | curses.A_STANDOUT,
        Style.WRONG_FLAG: curses.A_BOLD,
        Style.FLAG: curses.A_BOLD,
        Style.WON: curses.A_BOLD,
        Style.LOST: curses.A_BOLD,
        Style.HINT: curses.A_DIM,
    }
    for style in NUMBER_STYLES:
        attrs[style] = curses.A_BOLD
    if not curses.has_colors():
        return attrs

    curses.start_color()
    background = curses.COLOR_BLACK
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        pass

    def pair(number, foreground):
        curses.init_pair(number, foreground, background)
        return curses.color_pair(number)

    for number, color in NUMBER_COLORS.items():
        attrs[NUMBER_STYLES[number - 1]] |= pair(number, color)
    attrs[Style.FLAG] |= pair(9, curses.COLOR_RED)
    attrs[Style.QUESTION] = pair(10, curses.COLOR_YELLOW)
    attrs[Style.EXPLODED] |= pair(11, curses.COLOR_RED)
    attrs[Style.WRONG_FLAG] |= pair(12, curses.COLOR_MAGENTA)
    attrs[Style.WON] |= pair(13, curses.COLOR_GREEN)
    attrs[Style.LOST] |= pair(14, curses.COLOR_RED)
    return attrs


class TerminalApp:
    """Main loop tying curses input and output to a game session"""

    def __init__(self, session: GameSession, glyphs: Glyphs = UNICODE_GLYPHS):
        self.session = session
        self.glyphs = glyphs
        self.show_help = False
        self.running = False
        self.attrs: Dict[Style, int] = {}
        self.last_frame: Optional[Frame] = None

    def check_size(self, stdscr, rows: int, cols: int) -> bool:
        lines, width = stdscr.getmaxyx()
        needed = required_size(rows, cols)
        return lines >= needed[0] and width >= needed[1]

    def setup(self, stdscr):
        """Prepare the screen; raises TerminalTooSmall if the board cannot fit"""
        board = self.session.board
        if not self.check_size(stdscr, board.height, board.width):
            raise TerminalTooSmall(required_size(board.height, board.width), stdscr.getmaxyx())
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        stdscr.keypad(True)
        # Esc quits; don't wait a second for an escape sequence
        curses.set_escdelay(ESC_DELAY_MS)
        curses.mousemask(MOUSE_MASK)
        stdscr.timeout(TICK_MS)
        self.attrs = init_attrs()

    def run(self, stdscr):
        """Run until a Quit command; meant to be called through curses.wrapper"""
        self.setup(stdscr)
        self.running = True
        while self.running:
            self.draw(stdscr)
            event = self.read_event(stdscr)
            if event is None:
                continue
            command = map_event(event, self.session.cursor, board_layout(self.session))
            if command is not None:
                self.apply(command, stdscr)

    def draw(self, stdscr):
        frame = render_frame(self.session, self.glyphs, self.show_help)
        if frame == self.last_frame:
            return
        paint(stdscr, frame, self.attrs)
        self.last_frame = frame

    def read_event(self, stdscr) -> Optional[Event]:
        key = stdscr.getch()
        if key == curses.KEY_RESIZE:
            self.last_frame = None
            return None
        if key == curses.KEY_MOUSE:
            try:
                _, x, y, _, bstate = curses.getmouse()
            except curses.error:
                return None
            return translate_mouse(x, y, bstate)
        return translate_key(key)

    def apply(self, command: Command, stdscr=None):
        """Carry out one command against the session"""
        session = self.session
        if isinstance(command, Quit):
            self.running = False
        elif isinstance(command, Tick):
            session.tick()
        elif isinstance(command, ToggleHelp):
            self.show_help = not self.show_help
        elif isinstance(command, NewGame):
            difficulty = command.difficulty
            if (difficulty is not None and stdscr is not None
                    and not self.check_size(stdscr, difficulty.height, difficulty.width)):
                logger.warning("terminal too small for %s, keeping %s",
                               difficulty.name, session.difficulty.name)
                difficulty = None
            session.new_game(difficulty)
            self.show_help = False
        elif self.show_help:
            # the board is hidden behind the help screen
            return
        elif isinstance(command, MoveCursor):
            session.move_cursor(command.drow, command.dcol)
        elif isinstance(command, RevealAt):
            session.reveal(command.pos)
        elif isinstance(command, FlagAt):
            session.toggle_flag(command.pos)
        elif isinstance(command, ChordAt):
            session.chord(command.pos)
