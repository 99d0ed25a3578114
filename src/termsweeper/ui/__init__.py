"""
UI package initialization
"""

from .input_mapper import BoardLayout, map_event
from .renderer import ASCII_GLYPHS, UNICODE_GLYPHS, render_frame
from .terminal import TerminalApp, TerminalTooSmall

__all__ = [
    'BoardLayout', 'map_event', 'ASCII_GLYPHS', 'UNICODE_GLYPHS', 'render_frame',
    'TerminalApp', 'TerminalTooSmall',
]
