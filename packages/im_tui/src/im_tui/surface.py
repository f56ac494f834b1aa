"""
Render surfaces.

A surface is a grid of styled cells that the widgets write into during a
frame and that is shown all at once by ``present()``.

- RenderSurface: protocol consumed by the frame loop
- CellBuffer: in-memory cell grid
- TerminalSurface: presents a CellBuffer on a Terminal, rewriting only the
  rows that changed since the previous frame
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from im_tui.style import DEFAULT_STYLE, Style, text_width

if TYPE_CHECKING:
    from im_tui.terminal import Terminal

logger = logging.getLogger(__name__)

SYNC_BEGIN = "\x1b[?2026h"
SYNC_END = "\x1b[?2026l"
RESET = "\x1b[0m"

# Placeholder for the right half of a double-width character.
CONTINUATION = ""


class RenderSurface(Protocol):
    """What the frame loop needs from a render target."""

    def init(self) -> None: ...

    def teardown(self) -> None: ...

    def clear(self) -> None: ...

    def set_cell(self, x: int, y: int, char: str, style: Style) -> None: ...

    def present(self) -> None: ...

    def size(self) -> tuple[int, int]: ...

    def sync(self) -> None: ...


@dataclass(frozen=True)
class Cell:
    # One character plus any combining marks drawn on it.
    char: str = " "
    style: Style = DEFAULT_STYLE


class CellBuffer:
    """
    Grid of cells addressed by (x, y), origin top-left.

    Writes outside the grid are dropped.
    """

    def __init__(self, width: int = 0, height: int = 0, fill: Style = DEFAULT_STYLE) -> None:
        self._fill = fill
        self.width = 0
        self.height = 0
        self._rows: list[list[Cell]] = []
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.clear()

    def clear(self) -> None:
        blank = Cell(" ", self._fill)
        self._rows = [[blank] * self.width for _ in range(self.height)]

    def set_cell(self, x: int, y: int, char: str, style: Style) -> None:
        if not (0 <= y < self.height and 0 <= x < self.width):
            return
        row = self._rows[y]
        # Overwriting either half of a wide character blanks the other half.
        if row[x].char == CONTINUATION and x > 0:
            row[x - 1] = Cell(" ", row[x - 1].style)
        if x + 1 < self.width and row[x + 1].char == CONTINUATION:
            row[x + 1] = Cell(" ", row[x + 1].style)
        row[x] = Cell(char, style)
        if text_width(char) == 2:
            if x + 1 < self.width:
                row[x + 1] = Cell(CONTINUATION, style)
            else:
                # No room for the right half.
                row[x] = Cell(" ", style)

    def get_cell(self, x: int, y: int) -> Cell:
        return self._rows[y][x]

    def row(self, y: int) -> list[Cell]:
        return self._rows[y]

    def row_text(self, y: int) -> str:
        """Characters of a row, without styling."""
        return "".join(cell.char for cell in self._rows[y])


def render_row(cells: list[Cell]) -> str:
    """Encode a row of cells as text with SGR style changes."""
    parts: list[str] = []
    current: Style | None = None
    for cell in cells:
        if cell.char == CONTINUATION:
            continue
        if cell.style != current:
            parts.append(cell.style.sgr())
            current = cell.style
        parts.append(cell.char)
    parts.append(RESET)
    return "".join(parts)


class TerminalSurface:
    """
    RenderSurface backed by a Terminal.

    Each ``present()`` compares encoded rows with the previous frame and
    rewrites only the changed ones, inside a synchronized-output block.
    """

    def __init__(self, terminal: Terminal, background: Style = DEFAULT_STYLE) -> None:
        self.terminal = terminal
        self.buffer = CellBuffer(fill=background)
        self._previous_lines: list[str] = []
        self._full_redraw_count = 0

    @property
    def full_redraws(self) -> int:
        """Number of full redraws performed."""
        return self._full_redraw_count

    def init(self) -> None:
        self.buffer.resize(self.terminal.columns, self.terminal.rows)
        self._previous_lines = []
        self.terminal.clear_screen()
        logger.debug("surface initialised at %dx%d", self.buffer.width, self.buffer.height)

    def teardown(self) -> None:
        self.terminal.write(RESET)
        self.terminal.clear_screen()
        self._previous_lines = []

    def clear(self) -> None:
        self.buffer.clear()

    def set_cell(self, x: int, y: int, char: str, style: Style) -> None:
        self.buffer.set_cell(x, y, char, style)

    def size(self) -> tuple[int, int]:
        return self.buffer.width, self.buffer.height

    def sync(self) -> None:
        """Pick up a new terminal size and redraw everything next frame."""
        width, height = self.terminal.columns, self.terminal.rows
        if (width, height) != self.size():
            logger.info("terminal resized to %dx%d", width, height)
        self.buffer.resize(width, height)
        self._previous_lines = []

    def present(self) -> None:
        lines = [render_row(self.buffer.row(y)) for y in range(self.buffer.height)]
        full = len(self._previous_lines) != len(lines)

        out = [SYNC_BEGIN]
        for y, line in enumerate(lines):
            if not full and self._previous_lines[y] == line:
                continue
            out.append(f"\x1b[{y + 1};1H")
            out.append(line)
        out.append(SYNC_END)

        if full:
            self._full_redraw_count += 1
        if len(out) > 2:
            self.terminal.write("".join(out))
        self._previous_lines = lines
