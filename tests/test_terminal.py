"""
Tests for the curses front end (non-interactive)
The screen is a Mock; curses calls that need a real terminal are patched out
"""

import curses
from unittest.mock import Mock, patch

import numpy as np
import pytest
from termsweeper.game import DIFFICULTIES, GamePhase, GameSession
from termsweeper.ui.input_mapper import (
    ChordAt, ClickType, FlagAt, KeyEvent, MouseButton, MouseEvent, MoveCursor, NewGame, Quit,
    RevealAt, Tick, TickEvent, ToggleHelp,
)
from termsweeper.ui.terminal import (
    ESC_DELAY_MS, MOUSE_MASK, TerminalApp, TerminalTooSmall, translate_key, translate_mouse,
)
from conftest import FakeClock, start_session


@pytest.fixture
def screen():
    stdscr = Mock()
    stdscr.getmaxyx.return_value = (40, 100)
    return stdscr


@pytest.fixture
def no_terminal():
    """Patch the curses calls that require initscr()"""
    with patch.object(curses, 'curs_set'), \
            patch.object(curses, 'mousemask'), \
            patch.object(curses, 'set_escdelay'), \
            patch.object(curses, 'has_colors', return_value=False):
        yield


def beginner_session(clock=None):
    return GameSession(DIFFICULTIES['beginner'], rng=np.random.default_rng(5),
                       clock=clock or FakeClock())


class TestTranslateKey:

    def test_timeout_is_tick(self):
        assert translate_key(-1) == TickEvent()

    @pytest.mark.parametrize("code,name", [
        (curses.KEY_UP, 'UP'), (curses.KEY_DOWN, 'DOWN'),
        (curses.KEY_LEFT, 'LEFT'), (curses.KEY_RIGHT, 'RIGHT'),
        (10, 'ENTER'), (13, 'ENTER'), (curses.KEY_ENTER, 'ENTER'),
        (27, 'ESC'), (curses.KEY_F1, 'F1'), (curses.KEY_F2, 'F2'),
    ])
    def test_named_keys(self, code, name):
        assert translate_key(code) == KeyEvent(name)

    def test_printable_keys(self):
        assert translate_key(ord('f')) == KeyEvent('f')
        assert translate_key(ord(' ')) == KeyEvent(' ')

    def test_unsupported_codes(self):
        assert translate_key(curses.KEY_F5) is None
        assert translate_key(1) is None


class TestTranslateMouse:

    def test_left_click(self):
        assert translate_mouse(3, 4, curses.BUTTON1_CLICKED) == MouseEvent(3, 4, MouseButton.LEFT)

    def test_double_click(self):
        event = translate_mouse(3, 4, curses.BUTTON1_DOUBLE_CLICKED)
        assert event == MouseEvent(3, 4, MouseButton.LEFT, ClickType.DOUBLE)

    def test_middle_and_right(self):
        assert translate_mouse(0, 0, curses.BUTTON2_CLICKED).button == MouseButton.MIDDLE
        assert translate_mouse(0, 0, curses.BUTTON3_CLICKED).button == MouseButton.RIGHT

    @pytest.mark.parametrize("bstate,button", [
        (curses.BUTTON1_RELEASED, MouseButton.LEFT),
        (curses.BUTTON2_RELEASED, MouseButton.MIDDLE),
        (curses.BUTTON3_RELEASED, MouseButton.RIGHT),
    ])
    def test_slow_click_release_counts(self, bstate, button):
        assert translate_mouse(5, 6, bstate) == MouseEvent(5, 6, button)

    def test_press_is_ignored(self):
        assert translate_mouse(0, 0, curses.BUTTON1_PRESSED) is None

    def test_mask_subscribes_releases_not_presses(self):
        for released in (curses.BUTTON1_RELEASED, curses.BUTTON2_RELEASED, curses.BUTTON3_RELEASED):
            assert MOUSE_MASK & released
        for pressed in (curses.BUTTON1_PRESSED, curses.BUTTON2_PRESSED, curses.BUTTON3_PRESSED):
            assert not MOUSE_MASK & pressed


class TestApply:

    def test_quit_stops_loop(self):
        app = TerminalApp(beginner_session())
        app.running = True
        app.apply(Quit())
        assert app.running is False

    def test_reveal_starts_game(self):
        app = TerminalApp(beginner_session())
        app.apply(RevealAt((4, 4)))
        assert app.session.phase == GamePhase.RUNNING

    def test_move_flag_chord(self):
        session = start_session(3, 3, [(0, 0)])
        app = TerminalApp(session)

        app.apply(MoveCursor(-1, -1))
        assert session.cursor == (0, 0)
        app.apply(FlagAt((0, 0)))
        assert session.flags_placed == 1
        app.apply(RevealAt((1, 1)))
        app.apply(ChordAt((1, 1)))
        assert session.phase == GamePhase.WON

    def test_tick_updates_timer(self):
        clock = FakeClock()
        session = start_session(3, 3, [(0, 0)], clock=clock)
        app = TerminalApp(session)
        clock.advance(3)

        app.apply(Tick())

        assert session.elapsed_time == 3

    def test_help_hides_board_commands(self):
        session = start_session(3, 3, [(0, 0)])
        app = TerminalApp(session)

        app.apply(ToggleHelp())
        app.apply(RevealAt((2, 2)))
        assert session.board.revealed_count() == 0

        app.apply(ToggleHelp())
        app.apply(RevealAt((2, 2)))
        assert session.board.revealed_count() > 0

    def test_new_game_closes_help(self):
        app = TerminalApp(start_session(3, 3, [(0, 0)]))
        app.apply(ToggleHelp())
        app.apply(NewGame())

        assert app.show_help is False
        assert app.session.phase == GamePhase.NOT_STARTED

    def test_new_game_with_preset(self, screen):
        app = TerminalApp(beginner_session())
        app.apply(NewGame(DIFFICULTIES['expert']), screen)
        assert app.session.difficulty.name == 'expert'

    def test_new_game_preset_too_big_for_screen(self, screen):
        screen.getmaxyx.return_value = (20, 50)
        app = TerminalApp(beginner_session())

        app.apply(NewGame(DIFFICULTIES['expert']), screen)

        assert app.session.difficulty.name == 'beginner'
        assert app.session.phase == GamePhase.NOT_STARTED


class TestRun:

    def test_terminal_too_small(self, screen, no_terminal):
        screen.getmaxyx.return_value = (5, 10)
        app = TerminalApp(beginner_session())

        with pytest.raises(TerminalTooSmall) as excinfo:
            app.run(screen)
        assert excinfo.value.needed == (15, 40)

    def test_keyboard_session(self, screen, no_terminal):
        screen.getch.side_effect = [ord(' '), -1, ord('q')]
        app = TerminalApp(beginner_session())

        app.run(screen)

        assert app.running is False
        assert app.session.phase == GamePhase.RUNNING
        assert app.session.board.get_cell(4, 4).is_revealed()
        screen.timeout.assert_called_once()
        curses.mousemask.assert_called_once()

    def test_escape_delay_is_short(self, screen, no_terminal):
        screen.getch.side_effect = [27]
        app = TerminalApp(beginner_session())

        app.run(screen)

        assert app.running is False
        curses.set_escdelay.assert_called_once_with(ESC_DELAY_MS)

    def test_slow_right_click_flags(self, screen, no_terminal):
        screen.getch.side_effect = [curses.KEY_MOUSE, ord('q')]
        app = TerminalApp(start_session(3, 3, [(0, 0)]))

        # a held button only reports the release over cell (0, 0)
        with patch.object(curses, 'getmouse', return_value=(0, 1, 3, 0, curses.BUTTON3_RELEASED)):
            app.run(screen)

        assert app.session.board.get_cell(0, 0).is_flagged()

    def test_mouse_click_reveals(self, screen, no_terminal):
        screen.getch.side_effect = [curses.KEY_MOUSE, ord('q')]
        app = TerminalApp(beginner_session())

        # board cell (0, 0) is drawn at screen column 1, row 3
        with patch.object(curses, 'getmouse', return_value=(0, 1, 3, 0, curses.BUTTON1_CLICKED)):
            app.run(screen)

        assert app.session.board.get_cell(0, 0).is_revealed()

    def test_bad_mouse_event_is_ignored(self, screen, no_terminal):
        screen.getch.side_effect = [curses.KEY_MOUSE, ord('q')]
        app = TerminalApp(beginner_session())

        with patch.object(curses, 'getmouse', side_effect=curses.error):
            app.run(screen)

        assert app.session.phase == GamePhase.NOT_STARTED

    def test_repaints_only_on_change(self, screen, no_terminal):
        screen.getch.side_effect = [-1, -1, ord('x'), ord('d'), ord('q')]
        app = TerminalApp(beginner_session())

        app.run(screen)

        # initial frame, then the cursor move; ticks and unknown keys change nothing
        assert screen.erase.call_count == 2

    def test_resize_forces_repaint(self, screen, no_terminal):
        screen.getch.side_effect = [curses.KEY_RESIZE, ord('q')]
        app = TerminalApp(beginner_session())

        app.run(screen)

        assert screen.erase.call_count == 2
