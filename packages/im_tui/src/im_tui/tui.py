"""
ImTui - immediate-mode widgets and the frame loop.

Each frame the caller declares the whole UI by calling widget methods in
order; the methods draw and report, right away, whether the widget was
clicked. Nothing about a widget is kept between frames except the
identity that won pointer arbitration.

Usage:
    tui = ImTui()
    clicks = 0
    checked = Ref(False)
    for _ in tui.loop():
        if tui.button(" Button "):
            clicks += 1
        tui.break_line()
        tui.check("Enabled ", checked)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Hashable, Iterator, TypeVar

from im_tui.arbitration import HitArbiter, InteractionState
from im_tui.config import ImTuiOptions, options_from_env
from im_tui.cursor import Cursor
from im_tui.errors import InputInitError, SurfaceInitError
from im_tui.events import Event, KeyEvent, MouseEvent, ResizeEvent
from im_tui.input_source import InputSource, TerminalInput
from im_tui.keys import normalize_key_id
from im_tui.log import configure_logging
from im_tui.pointer import Area, Pointer
from im_tui.style import (
    Style,
    Theme,
    button_style,
    char_width,
    joins_previous,
    text_width,
    toggle_style,
)
from im_tui.surface import RenderSurface, TerminalSurface
from im_tui.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

T = TypeVar("T")

CHECK_OFF = "[ ] "
CHECK_ON = "[X] "
RADIO_OFF = "( ) "
RADIO_ON = "(0) "
NO_SELECTION = -1


@dataclass
class Ref(Generic[T]):
    """
    A caller-owned mutable value.

    Toggle, check and radio widgets read and write ``value`` during the
    call and keep no reference to the cell afterwards.
    """

    value: T


class ImTui:
    """
    Immediate-mode terminal UI.

    Owns the pointer tracker, the hit arbiter and the layout cursor, so
    several instances can run side by side with their own surfaces.
    """

    def __init__(
        self,
        theme: Theme | None = None,
        options: ImTuiOptions | None = None,
        surface: RenderSurface | None = None,
        input_source: InputSource | None = None,
        terminal: Terminal | None = None,
    ) -> None:
        """
        Args:
            theme: Widget styles; defaults to the built-in dark theme
            options: Runtime options; defaults to IMTUI_* environment values
            surface: Where frames are drawn; defaults to the terminal
            input_source: Where events come from; defaults to the terminal
            terminal: Terminal shared by the default surface and input
        """
        self.theme = theme if theme is not None else Theme()
        self.options = options if options is not None else options_from_env()

        if surface is None or input_source is None:
            if terminal is None:
                terminal = ProcessTerminal(mouse_motion=self.options.mouse_motion)
        self.surface: RenderSurface = (
            surface if surface is not None else TerminalSurface(terminal, self.theme.background)
        )
        self.input: InputSource = (
            input_source if input_source is not None else TerminalInput(terminal)
        )

        self.pointer = Pointer()
        self.arbiter = HitArbiter()
        self.cursor = Cursor()

        self._quit_keys = {normalize_key_id(k) for k in self.options.quit_keys}
        self._label_uses: dict[str, int] = {}
        self._running = False

    # -------------------------------------------------------------------------
    # Frame loop
    # -------------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._running

    def loop(self) -> Iterator[int]:
        """
        Run the UI, yielding once per frame with the frame number.

        The body of the ``for`` loop is the frame's draw phase. Leaving the
        loop (``break``, an exception, or a quit key) tears down the
        surface and stops input.

        Raises:
            InputInitError: The input source could not be started
            SurfaceInitError: The render surface could not be initialised
        """
        self._start()
        try:
            frame = 0
            while True:
                event = self.input.wait(self.options.tick_seconds)
                if event is not None and not self._handle_event(event):
                    logger.info("quit requested at frame %d", frame)
                    return

                self._begin_frame()
                yield frame
                self.surface.present()

                # Make current values the last values for change
                # tests in the next frame.
                self.pointer.swap()
                self.arbiter.swap()
                frame += 1
        finally:
            self._stop()

    def _start(self) -> None:
        configure_logging(self.options)
        try:
            self.input.start()
        except InputInitError:
            raise
        except OSError as exc:
            raise InputInitError(str(exc)) from exc

        try:
            self.surface.init()
        except SurfaceInitError:
            self.input.stop()
            raise
        except OSError as exc:
            self.input.stop()
            raise SurfaceInitError(str(exc)) from exc

        self.pointer.reset()
        self.arbiter = HitArbiter()
        self._running = True
        logger.info("frame loop started")

    def _stop(self) -> None:
        self._running = False
        try:
            self.surface.teardown()
        finally:
            self.input.stop()
        logger.info("frame loop stopped")

    def _handle_event(self, event: Event) -> bool:
        """Fold one event into the UI state; False means quit."""
        if isinstance(event, MouseEvent):
            buttons = event.fold_buttons(self.pointer.buttons.curr)
            self.pointer.update(event.x, event.y, buttons)
        elif isinstance(event, KeyEvent):
            if normalize_key_id(event.key) in self._quit_keys:
                return False
        elif isinstance(event, ResizeEvent):
            self.surface.sync()
        else:
            logger.debug("ignoring event %r", event)
        return True

    def _begin_frame(self) -> None:
        self.cursor.reset()
        self.arbiter.begin_frame()
        self._label_uses.clear()
        self.surface.clear()

    # -------------------------------------------------------------------------
    # Widgets
    # -------------------------------------------------------------------------

    def button(self, label: str, key: Hashable | None = None) -> bool:
        """
        Draw a button. Returns True in the frame it is clicked.
        """
        area = self._area(label)
        state = self._interact(label, key, area)
        self._fill_text(label, button_style(self.theme, state))
        return state.clicked

    def toggle(self, label: str, value: Ref[bool], key: Hashable | None = None) -> bool:
        """
        Draw a toggle button that flips ``value`` when clicked.
        Returns True in the frame it is clicked.
        """
        return self.toggler("", "", label, value, key)

    def check(self, label: str, value: Ref[bool], key: Hashable | None = None) -> bool:
        """
        Draw a checkbox that flips ``value`` when clicked.
        Returns True in the frame it is clicked.
        """
        return self.toggler(CHECK_OFF, CHECK_ON, label, value, key)

    def radio(
        self,
        label: str,
        id: int,
        selected: Ref[int],
        key: Hashable | None = None,
    ) -> bool:
        """
        Draw a radio button of the group sharing ``selected``.

        Clicking it selects ``id``; clicking it while selected clears the
        group to -1. Returns True in the frame it is clicked.
        """
        toggled = Ref(selected.value == id)
        if self.toggler(RADIO_OFF, RADIO_ON, label, toggled, key):
            selected.value = id if toggled.value else NO_SELECTION
            return True
        return False

    def text(self, content: str) -> bool:
        """
        Draw plain text. Returns True if the pointer was pressed and
        released inside it; text takes no part in arbitration.
        """
        area = self._area(content)
        self._fill_text(content, self.theme.text)
        return self.pointer.pressed_in(area)

    def toggler(
        self,
        off: str,
        on: str,
        label: str,
        value: Ref[bool],
        key: Hashable | None = None,
    ) -> bool:
        """
        Toggle button with custom off/on glyphs drawn before the label.

        The glyph takes the width of the wider of ``off`` and ``on``, so
        the area does not change when the value flips.
        """
        glyph_width = max(text_width(off), text_width(on))
        area = Area.of(self.cursor.x, self.cursor.y, glyph_width + text_width(label))
        state = self._interact(label, key, area)
        if state.clicked:
            value.value = not value.value
        glyph = on if value.value else off
        glyph += " " * (glyph_width - text_width(glyph))
        style = toggle_style(self.theme, state, value.value)
        self._fill_text(glyph, style)
        self._fill_text(label, style)
        return state.clicked

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def move(self, x: int, y: int) -> None:
        """Move the cursor to a given position."""
        self.cursor.move(x, y)

    def move_rel(self, dx: int, dy: int) -> None:
        """Move the cursor relative to its current position."""
        self.cursor.move_rel(dx, dy)

    def break_line(self) -> None:
        """Move the cursor to the start of the next line."""
        self.cursor.break_line()

    def size(self) -> tuple[int, int]:
        return self.surface.size()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _identity(self, label: str, key: Hashable | None) -> Hashable:
        """
        Explicit key if given, else the label plus how many widgets with
        the same label came before it in this frame.
        """
        if key is not None:
            return key
        n = self._label_uses.get(label, 0)
        self._label_uses[label] = n + 1
        return (label, n)

    def _interact(self, label: str, key: Hashable | None, area: Area) -> InteractionState:
        return self.arbiter.resolve(self._identity(label, key), area, self.pointer)

    def _area(self, *texts: str) -> Area:
        width = sum(text_width(t) for t in texts)
        return Area.of(self.cursor.x, self.cursor.y, width)

    def _fill_text(self, text: str, style: Style) -> None:
        # (x, y, text) of the last cell drawn, for combining marks to join.
        last: tuple[int, int, str] | None = None
        for char in text:
            if joins_previous(char):
                if last is not None:
                    x, y, cell = last
                    last = (x, y, cell + char)
                    self.surface.set_cell(x, y, cell + char, style)
                continue
            width = char_width(char)
            if width == 0:
                continue
            self.surface.set_cell(self.cursor.x, self.cursor.y, char, style)
            last = (self.cursor.x, self.cursor.y, char)
            self.cursor.advance(width)
