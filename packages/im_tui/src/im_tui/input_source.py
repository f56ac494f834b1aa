"""
Input sources for the frame loop.

TerminalInput decodes sequences coming from a Terminal's reader thread and
forwards them as events into a queue. ``wait()`` is the frame loop's only
blocking call.
"""

from __future__ import annotations

import logging
import queue
from typing import TYPE_CHECKING, Protocol

from im_tui.events import Event, ResizeEvent, parse_event

if TYPE_CHECKING:
    from im_tui.terminal import Terminal

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...

    def wait(self, timeout: float) -> Event | None:
        """Next event, or None once ``timeout`` seconds pass without one."""
        ...


class TerminalInput:
    """InputSource reading keyboard, mouse and resize events from a Terminal."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._events: queue.Queue[Event] = queue.Queue()

    def _on_input(self, data: str) -> None:
        event = parse_event(data)
        if event is None:
            logger.debug("ignoring unrecognised input %r", data)
            return
        self._events.put(event)

    def _on_resize(self) -> None:
        self._events.put(ResizeEvent(self.terminal.columns, self.terminal.rows))

    def start(self) -> None:
        self.terminal.start(self._on_input, self._on_resize)

    def stop(self) -> None:
        self.terminal.stop()

    def wait(self, timeout: float) -> Event | None:
        try:
            return self._events.get(timeout=timeout)
        except queue.Empty:
            return None
