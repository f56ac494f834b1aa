"""
Input events and decoding of terminal input sequences.

The terminal reports mouse activity with SGR extended reports
(``ESC [ < b ; x ; y M`` for press/motion, ``... m`` for release) and, on
older terminals, with X10 reports (``ESC [ M`` followed by three bytes).
Coordinates in both are 1-based; events carry 0-based cells.

Press, release and wheel reports name a single button, not the full set of
held buttons. ``MouseEvent.fold_buttons`` applies a report to the mask of
buttons held so far.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Union

from im_tui.keys import parse_key

# Button mask bits
BUTTON_NONE = 0
BUTTON_PRIMARY = 1 << 0
BUTTON_SECONDARY = 1 << 1
BUTTON_MIDDLE = 1 << 2
WHEEL_UP = 1 << 8
WHEEL_DOWN = 1 << 9

BUTTONS_ALL = BUTTON_PRIMARY | BUTTON_SECONDARY | BUTTON_MIDDLE
WHEEL_ALL = WHEEL_UP | WHEEL_DOWN

# Modifier bits, as reported in the mouse button byte
MOD_SHIFT = 4
MOD_ALT = 8
MOD_CTRL = 16

_MOTION_FLAG = 32
_WHEEL_FLAG = 64

_SGR_MOUSE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")

_BUTTON_CODES = {
    0: BUTTON_PRIMARY,
    1: BUTTON_MIDDLE,
    2: BUTTON_SECONDARY,
}

MouseAction = Literal["move", "press", "release", "wheel"]


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    columns: int
    rows: int


@dataclass(frozen=True)
class KeyEvent:
    """A key press, identified like ``"ctrl+c"``, ``"escape"`` or ``"a"``."""

    key: str
    data: str = ""


@dataclass(frozen=True)
class MouseEvent:
    """
    Pointer position (0-based cells) and a button report.

    - move: ``buttons`` is what is held while moving; BUTTON_NONE means
      nothing is held
    - press: ``buttons`` went down
    - release: ``buttons`` went up
    - wheel: a wheel step; held buttons are unaffected
    """

    x: int
    y: int
    buttons: int = BUTTON_NONE
    modifiers: int = 0
    action: MouseAction = "move"

    def fold_buttons(self, held: int) -> int:
        """Mask of buttons held after this report, given the mask before it."""
        # Wheel bits only last for the report that carried them.
        held &= ~WHEEL_ALL
        if self.action in ("press", "wheel"):
            return held | self.buttons
        if self.action == "release":
            return held & ~self.buttons
        if self.buttons == BUTTON_NONE:
            return BUTTON_NONE
        return held | self.buttons


Event = Union[ResizeEvent, KeyEvent, MouseEvent]


def _decode_button_byte(code: int, released: bool) -> tuple[int, int, MouseAction]:
    """Split a mouse button byte into (button mask, modifier bits, action)."""
    modifiers = code & (MOD_SHIFT | MOD_ALT | MOD_CTRL)
    if code & _WHEEL_FLAG:
        return (WHEEL_DOWN if code & 1 else WHEEL_UP), modifiers, "wheel"
    button = _BUTTON_CODES.get(code & 3, BUTTON_NONE)
    if code & _MOTION_FLAG:
        return button, modifiers, "move"
    if released:
        return button, modifiers, "release"
    return button, modifiers, "press"


def parse_mouse(data: str) -> MouseEvent | None:
    """
    Decode an SGR or X10 mouse report.

    Returns:
        MouseEvent, or None if ``data`` is not a well-formed mouse report
    """
    match = _SGR_MOUSE.match(data)
    if match:
        code, col, row = (int(match.group(i)) for i in range(1, 4))
        if col < 1 or row < 1:
            return None
        buttons, modifiers, action = _decode_button_byte(code, released=match.group(4) == "m")
        return MouseEvent(col - 1, row - 1, buttons, modifiers, action)

    if data.startswith("\x1b[M") and len(data) == 6:
        code, col, row = (ord(c) - 32 for c in data[3:])
        if col < 1 or row < 1:
            return None
        # X10 releases do not say which button went up.
        if (code & 3) == 3 and not code & (_WHEEL_FLAG | _MOTION_FLAG):
            modifiers = code & (MOD_SHIFT | MOD_ALT | MOD_CTRL)
            return MouseEvent(col - 1, row - 1, BUTTONS_ALL, modifiers, "release")
        buttons, modifiers, action = _decode_button_byte(code, released=False)
        return MouseEvent(col - 1, row - 1, buttons, modifiers, action)

    return None


def parse_event(data: str) -> Event | None:
    """
    Decode one complete input sequence into an event.

    Args:
        data: A single complete sequence as produced by SequenceBuffer

    Returns:
        MouseEvent or KeyEvent, or None when the sequence is not understood
    """
    if not data:
        return None
    if data.startswith("\x1b[<") or data.startswith("\x1b[M"):
        return parse_mouse(data)

    key = parse_key(data)
    if key is not None:
        return KeyEvent(key, data)
    if len(data) == 1 and data.isprintable():
        return KeyEvent(data, data)
    return None
