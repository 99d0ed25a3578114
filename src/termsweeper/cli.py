"""
Minesweeper - Command Line Entry Point
Parses options, builds the session and hands the terminal to the game loop
"""

import argparse
import curses
import logging
import sys
from typing import List, Optional

import numpy as np

from .game import DIFFICULTIES, Difficulty, GameSession, InvalidConfiguration
from .ui import ASCII_GLYPHS, UNICODE_GLYPHS, TerminalApp, TerminalTooSmall

logger = logging.getLogger(__name__)

CONTROLS = """
Controls:
  Arrows | WASD | hjkl      move cursor
  Space | Enter | L-click   reveal
  F | R-click               toggle flag
  C | M-click | dbl-click   chord (open neighbors when flags match the number)
  N | F2                    new game
  1 / 2 / 3                 new beginner / intermediate / expert game
  ? | F1                    help
  Q | Esc                   quit

Examples:
  termsweeper --difficulty expert
  termsweeper --width 20 --height 12 --mines 30 --question-marks
  termsweeper --seed 42 --ascii
"""


def seed_value(text: str) -> int:
    """argparse type for --seed; numpy only accepts non-negative seeds"""
    try:
        seed = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {text!r}")
    if seed < 0:
        raise argparse.ArgumentTypeError(f"seed must be non-negative, got {seed}")
    return seed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='termsweeper',
        description="Classic Minesweeper in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=CONTROLS,
    )

    parser.add_argument('--difficulty',
                        choices=list(DIFFICULTIES),
                        default='beginner',
                        help='Board preset (default: beginner)')

    parser.add_argument('--width',
                        type=int,
                        help='Custom board width (requires --height and --mines)')

    parser.add_argument('--height',
                        type=int,
                        help='Custom board height (requires --width and --mines)')

    parser.add_argument('--mines',
                        type=int,
                        help='Custom mine count (requires --width and --height)')

    parser.add_argument('--question-marks',
                        action='store_true',
                        help='Cycle flag key through flag and question mark')

    parser.add_argument('--ascii',
                        action='store_true',
                        help='Use plain ASCII glyphs')

    parser.add_argument('--seed',
                        type=seed_value,
                        help='Seed for mine placement (repeatable boards)')

    parser.add_argument('--log-file',
                        type=str,
                        help='Write debug log to this file')
    return parser


def build_difficulty(args: argparse.Namespace) -> Difficulty:
    """Preset from --difficulty, or a validated custom board when all of W/H/M are given"""
    custom = (args.width, args.height, args.mines)
    if all(value is None for value in custom):
        return DIFFICULTIES[args.difficulty]
    if any(value is None for value in custom):
        raise InvalidConfiguration("--width, --height and --mines must be given together")
    return Difficulty.custom(args.width, args.height, args.mines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the minesweeper game"""
    args = build_parser().parse_args(argv)

    if args.log_file:
        logging.basicConfig(filename=args.log_file, level=logging.DEBUG,
                            format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    else:
        logging.getLogger().addHandler(logging.NullHandler())

    try:
        difficulty = build_difficulty(args)
    except InvalidConfiguration as e:
        print(f"❌ Invalid board configuration: {e}", file=sys.stderr)
        return 2

    session = GameSession(difficulty,
                          rng=np.random.default_rng(args.seed),
                          use_question_marks=args.question_marks)
    app = TerminalApp(session, ASCII_GLYPHS if args.ascii else UNICODE_GLYPHS)

    try:
        curses.wrapper(app.run)
    except TerminalTooSmall as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except curses.error as e:
        # no usable terminal: unknown TERM, output not a tty
        logger.error("curses failed: %s", e)
        print(f"❌ Error running minesweeper: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nGame interrupted by user")
    logger.info("exited normally")
    return 0


if __name__ == "__main__":
    sys.exit(main())
