"""
Terminal interface for im_tui.

ProcessTerminal drives the real terminal on stdin/stdout: raw mode, the
alternate screen, mouse reporting and SIGWINCH. A background thread reads
stdin and hands complete input sequences to the ``on_input`` callback.
"""

from __future__ import annotations

import logging
import os
import select
import shutil
import signal
import sys
import threading
from typing import Any, Callable, Protocol

from im_tui.errors import InputInitError
from im_tui.input_buffer import SequenceBuffer

logger = logging.getLogger(__name__)

ALT_SCREEN_ON = "\x1b[?1049h"
ALT_SCREEN_OFF = "\x1b[?1049l"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
# Button press/release, drag motion, SGR extended coordinates
MOUSE_ON = "\x1b[?1000h\x1b[?1002h\x1b[?1006h"
MOUSE_OFF = "\x1b[?1006l\x1b[?1002l\x1b[?1000l"
# Any motion, even with no button held
MOUSE_MOTION_ON = "\x1b[?1003h"
MOUSE_MOTION_OFF = "\x1b[?1003l"

_READ_POLL_SECONDS = 0.05


class Terminal(Protocol):
    """Terminal interface - protocol for terminal implementations."""

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def write(self, data: str) -> None: ...

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_screen(self) -> None: ...


class ProcessTerminal:
    """Terminal implementation using process stdin/stdout."""

    def __init__(self, mouse_motion: bool = True) -> None:
        self._mouse_motion = mouse_motion
        self._started = False
        self._input_handler: Callable[[str], None] | None = None
        self._resize_handler: Callable[[], None] | None = None
        self._buffer = SequenceBuffer()
        self._old_term_settings: Any = None
        self._old_sigwinch: Any = None
        self._reader: threading.Thread | None = None
        self._stop_event = threading.Event()

    @property
    def columns(self) -> int:
        return shutil.get_terminal_size((80, 24)).columns

    @property
    def rows(self) -> int:
        return shutil.get_terminal_size((80, 24)).lines

    def write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()

    def _enable_raw_mode(self) -> None:
        if sys.platform == "win32":
            raise InputInitError("raw terminal input is not supported on Windows")

        import termios
        import tty

        try:
            fd = sys.stdin.fileno()
            self._old_term_settings = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError, ValueError) as exc:
            raise InputInitError(f"stdin is not a terminal: {exc}") from exc

    def _disable_raw_mode(self) -> None:
        if self._old_term_settings is None:
            return

        import termios

        try:
            termios.tcsetattr(
                sys.stdin.fileno(),
                termios.TCSADRAIN,
                self._old_term_settings,
            )
        except (termios.error, OSError) as exc:
            logger.warning("could not restore terminal settings: %s", exc)
        self._old_term_settings = None

    def _emit(self, sequences: list[str]) -> None:
        handler = self._input_handler
        if handler is None:
            return
        for sequence in sequences:
            handler(sequence)

    def _read_stdin(self) -> None:
        fd = sys.stdin.fileno()
        while not self._stop_event.is_set():
            try:
                readable, _, _ = select.select([fd], [], [], _READ_POLL_SECONDS)
            except (OSError, ValueError):
                logger.debug("stdin closed, reader exiting", exc_info=True)
                return
            if not readable:
                # Idle: a held-back ESC was a real key press.
                self._emit(self._buffer.flush())
                continue
            data = os.read(fd, 1024)
            if not data:
                return
            self._emit(self._buffer.feed(data))

    def _on_sigwinch(self, _signum: int, _frame: object) -> None:
        if self._resize_handler:
            self._resize_handler()

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        self._input_handler = on_input
        self._resize_handler = on_resize
        self._enable_raw_mode()
        self._started = True

        self.write(ALT_SCREEN_ON + MOUSE_ON)
        self.hide_cursor()
        if self._mouse_motion:
            self.write(MOUSE_MOTION_ON)

        try:
            self._old_sigwinch = signal.signal(signal.SIGWINCH, self._on_sigwinch)
        except ValueError:
            # Not on the main thread; resizes are picked up on the next sync.
            logger.info("SIGWINCH handler not installed outside the main thread")

        self._buffer.clear()
        self._stop_event.clear()
        self._reader = threading.Thread(
            target=self._read_stdin, name="im_tui-input", daemon=True
        )
        self._reader.start()
        logger.debug("terminal started (%dx%d)", self.columns, self.rows)

    def stop(self) -> None:
        if not self._started:
            return
        self._started = False

        self._stop_event.set()
        if self._reader is not None and self._reader is not threading.current_thread():
            self._reader.join(timeout=1.0)
        self._reader = None

        if self._mouse_motion:
            self.write(MOUSE_MOTION_OFF)
        self.show_cursor()
        self.write(MOUSE_OFF + ALT_SCREEN_OFF)

        if self._old_sigwinch is not None:
            try:
                signal.signal(signal.SIGWINCH, self._old_sigwinch)
            except (ValueError, OSError) as exc:
                logger.debug("could not restore SIGWINCH handler: %s", exc)
            self._old_sigwinch = None

        self._input_handler = None
        self._resize_handler = None
        self._buffer.clear()

        self._disable_raw_mode()
        logger.debug("terminal stopped")

    def hide_cursor(self) -> None:
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)

    def clear_screen(self) -> None:
        self.write("\x1b[2J\x1b[H")
