"""
im_tui: immediate-mode widgets for terminal user interfaces

The caller declares the whole UI every frame by calling widget methods;
pointer state is tracked across frames and each widget call reports right
away whether it was clicked.
"""

from im_tui.arbitration import HitArbiter, InteractionState
from im_tui.config import ImTuiOptions, options_from_env
from im_tui.cursor import Cursor
from im_tui.errors import ImTuiError, InputInitError, SurfaceInitError
from im_tui.events import (
    BUTTON_MIDDLE,
    BUTTON_NONE,
    BUTTON_PRIMARY,
    BUTTON_SECONDARY,
    WHEEL_DOWN,
    WHEEL_UP,
    Event,
    KeyEvent,
    MouseEvent,
    ResizeEvent,
    parse_event,
)
from im_tui.input_buffer import SequenceBuffer
from im_tui.input_source import InputSource, TerminalInput
from im_tui.keys import matches_key, parse_key
from im_tui.log import configure_logging
from im_tui.pointer import Area, Delta, Pointer
from im_tui.style import Style, Theme, button_style, text_width, toggle_style
from im_tui.surface import CellBuffer, RenderSurface, TerminalSurface
from im_tui.terminal import ProcessTerminal, Terminal
from im_tui.tui import ImTui, Ref

__all__ = [
    "ImTui",
    "Ref",
    "Theme",
    "Style",
    "ImTuiOptions",
    "options_from_env",
    "configure_logging",
    "ImTuiError",
    "InputInitError",
    "SurfaceInitError",
    "Pointer",
    "Area",
    "Delta",
    "HitArbiter",
    "InteractionState",
    "Cursor",
    "button_style",
    "toggle_style",
    "text_width",
    "Event",
    "KeyEvent",
    "MouseEvent",
    "ResizeEvent",
    "parse_event",
    "BUTTON_NONE",
    "BUTTON_PRIMARY",
    "BUTTON_SECONDARY",
    "BUTTON_MIDDLE",
    "WHEEL_UP",
    "WHEEL_DOWN",
    "parse_key",
    "matches_key",
    "SequenceBuffer",
    "RenderSurface",
    "CellBuffer",
    "TerminalSurface",
    "InputSource",
    "TerminalInput",
    "Terminal",
    "ProcessTerminal",
]
