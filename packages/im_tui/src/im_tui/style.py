"""
Cell styles, the widget theme and style selection.

The selection functions are pure: they map an interaction state (and the
toggled flag for toggles) to one of the theme's styles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from wcwidth import wcwidth

if TYPE_CHECKING:
    from im_tui.arbitration import InteractionState


class Style(BaseModel):
    """Foreground/background colors as 0xRRGGBB, plus attributes."""

    model_config = ConfigDict(frozen=True)

    fg: int | None = None
    bg: int | None = None
    bold: bool = False
    underline: bool = False

    def sgr(self) -> str:
        """SGR escape sequence that selects this style from a reset state."""
        params = ["0"]
        if self.bold:
            params.append("1")
        if self.underline:
            params.append("4")
        if self.fg is not None:
            params.append("38;2;{};{};{}".format(*_rgb(self.fg)))
        if self.bg is not None:
            params.append("48;2;{};{};{}".format(*_rgb(self.bg)))
        return f"\x1b[{';'.join(params)}m"


def _rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


DEFAULT_STYLE = Style()


class Theme(BaseModel):
    """
    Styles used by the widgets.

    - text: plain labels drawn with ``text()``
    - background: the screen fill
    - normal: an idle button or toggle
    - active: pressed, or toggled while not hovered
    - over: hovered
    - over_active: toggled and hovered
    """

    model_config = ConfigDict(populate_by_name=True)

    text: Style = Style(fg=0xFFFFFF, bg=0x181818)
    background: Style = Style(fg=0xFFFFFF, bg=0x181818)
    normal: Style = Style(fg=0xFFFFFF, bg=0x23272E)
    active: Style = Style(fg=0xFFFFFF, bg=0x264F78)
    over: Style = Style(fg=0xFFFFFF, bg=0x1976D2)
    over_active: Style = Field(default=Style(fg=0xFFFFFF, bg=0x1565C0), alias="overActive")


def button_style(theme: Theme, state: InteractionState) -> Style:
    if state.down:
        return theme.active
    if state.over:
        return theme.over
    return theme.normal


def toggle_style(theme: Theme, state: InteractionState, toggled: bool) -> Style:
    """
    Pick a toggle's style.

    | over | down | toggled | style       |
    |------|------|---------|-------------|
    | no   | -    | no      | normal      |
    | no   | -    | yes     | active      |
    | yes  | no   | no      | over        |
    | yes  | no   | yes     | over_active |
    | yes  | yes  | any     | active      |
    """
    if state.down or (toggled and not state.over):
        return theme.active
    if toggled and state.over:
        return theme.over_active
    if state.over:
        return theme.over
    return theme.normal


def char_width(char: str) -> int:
    """Terminal cells taken by one character; 0 for non-printing ones."""
    return max(0, wcwidth(char))


def joins_previous(char: str) -> bool:
    """Tell if ``char`` is a zero-width mark drawn on the preceding cell."""
    return ord(char) >= 0x20 and wcwidth(char) == 0


def text_width(text: str) -> int:
    """
    Terminal cells taken by ``text``.

    Example:
        >>> text_width("日本")
        4
    """
    return sum(char_width(c) for c in text)
