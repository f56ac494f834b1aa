"""
Shared pytest fixtures for im_tui tests.
"""

from __future__ import annotations

from collections import deque
from typing import Callable

import pytest

from im_tui.config import ImTuiOptions
from im_tui.events import BUTTON_NONE, BUTTON_PRIMARY, Event, KeyEvent, MouseEvent
from im_tui.style import Style
from im_tui.surface import CellBuffer
from im_tui.tui import ImTui


# =============================================================================
# Terminal Mock Fixtures
# =============================================================================


class MockTerminal:
    """Mock terminal for testing without real I/O."""

    def __init__(self, width: int = 80, height: int = 24) -> None:
        self._columns = width
        self._rows = height
        self._writes: list[str] = []
        self._started = False
        self._on_input: Callable[[str], None] | None = None
        self._on_resize: Callable[[], None] | None = None

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def started(self) -> bool:
        return self._started

    def write(self, data: str) -> None:
        self._writes.append(data)

    def get_writes(self) -> list[str]:
        return self._writes.copy()

    def clear_writes(self) -> None:
        self._writes.clear()

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        self._started = True
        self._on_input = on_input
        self._on_resize = on_resize

    def stop(self) -> None:
        self._started = False

    def hide_cursor(self) -> None:
        self.write("\x1b[?25l")

    def show_cursor(self) -> None:
        self.write("\x1b[?25h")

    def clear_screen(self) -> None:
        self.write("\x1b[2J\x1b[H")

    def simulate_input(self, data: str) -> None:
        """Simulate terminal input for testing."""
        if self._on_input:
            self._on_input(data)

    def simulate_resize(self, width: int, height: int) -> None:
        """Simulate terminal resize for testing."""
        self._columns = width
        self._rows = height
        if self._on_resize:
            self._on_resize()


@pytest.fixture
def mock_terminal() -> MockTerminal:
    return MockTerminal()


# =============================================================================
# Surface and Input Fakes
# =============================================================================


class FakeSurface:
    """In-memory render surface that records lifecycle calls."""

    def __init__(self, width: int = 40, height: int = 10) -> None:
        self.buffer = CellBuffer(width, height)
        self.calls: list[str] = []
        self.frames: list[list[str]] = []

    def init(self) -> None:
        self.calls.append("init")

    def teardown(self) -> None:
        self.calls.append("teardown")

    def clear(self) -> None:
        self.buffer.clear()

    def set_cell(self, x: int, y: int, char: str, style: Style) -> None:
        self.buffer.set_cell(x, y, char, style)

    def present(self) -> None:
        self.calls.append("present")
        self.frames.append([self.buffer.row_text(y) for y in range(self.buffer.height)])

    def size(self) -> tuple[int, int]:
        return self.buffer.width, self.buffer.height

    def sync(self) -> None:
        self.calls.append("sync")

    def style_at(self, x: int, y: int) -> Style:
        return self.buffer.get_cell(x, y).style


class ScriptedInput:
    """
    Input source that replays a script.

    Each ``wait()`` consumes one entry; ``None`` entries are idle ticks.
    Once the script runs out it answers with the escape key.
    """

    def __init__(self, events: list[Event | None] | None = None) -> None:
        self.events: deque[Event | None] = deque(events or [])
        self.started = False
        self.stopped = False
        self.timeouts: list[float] = []

    def push(self, *events: Event | None) -> None:
        self.events.extend(events)

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def wait(self, timeout: float) -> Event | None:
        self.timeouts.append(timeout)
        if self.events:
            return self.events.popleft()
        return KeyEvent("escape", "\x1b")


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def scripted_input() -> ScriptedInput:
    return ScriptedInput()


@pytest.fixture
def tui(surface: FakeSurface, scripted_input: ScriptedInput) -> ImTui:
    return ImTui(
        options=ImTuiOptions(tick_ms=1),
        surface=surface,
        input_source=scripted_input,
    )


# =============================================================================
# Key Sequence Test Data Fixtures
# =============================================================================


@pytest.fixture(params=[
    ("\x1b[A", "up"),
    ("\x1b[B", "down"),
    ("\x1b[C", "right"),
    ("\x1b[D", "left"),
    ("\x1b[H", "home"),
    ("\x1b[F", "end"),
    ("\x1b[5~", "pageUp"),
    ("\x1b[6~", "pageDown"),
    ("\x1b[2~", "insert"),
    ("\x1b[3~", "delete"),
])
def legacy_arrow_sequences(request) -> tuple[str, str]:
    """Provide (sequence, key_id) for legacy navigation keys."""
    return request.param


@pytest.fixture(params=[
    ("\x1bOP", "f1"),
    ("\x1bOQ", "f2"),
    ("\x1bOR", "f3"),
    ("\x1bOS", "f4"),
    ("\x1b[15~", "f5"),
    ("\x1b[17~", "f6"),
    ("\x1b[18~", "f7"),
    ("\x1b[19~", "f8"),
    ("\x1b[20~", "f9"),
    ("\x1b[21~", "f10"),
    ("\x1b[23~", "f11"),
    ("\x1b[24~", "f12"),
])
def legacy_function_sequences(request) -> tuple[str, str]:
    """Provide (sequence, key_id) for legacy function keys."""
    return request.param


# =============================================================================
# Pointer Scripting Helpers
# =============================================================================


def hover(x: int, y: int) -> MouseEvent:
    return MouseEvent(x, y, BUTTON_NONE)


def press(x: int, y: int) -> MouseEvent:
    return MouseEvent(x, y, BUTTON_PRIMARY)


def release(x: int, y: int) -> MouseEvent:
    return MouseEvent(x, y, BUTTON_NONE)


def click(x: int, y: int) -> list[MouseEvent]:
    """Hover, press and release at one cell: three frames."""
    return [hover(x, y), press(x, y), release(x, y)]


def run_frames(tui: ImTui, body: Callable[[int], object]) -> list[object]:
    """Run the loop until the script ends; collect the body's result per frame."""
    results = []
    for frame in tui.loop():
        results.append(body(frame))
    return results
