"""
Layout cursor - the draw position inside a frame.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Cursor:
    """Current draw position in character cells."""

    x: int = 0
    y: int = 0

    def reset(self) -> None:
        """Move back to the frame origin."""
        self.x = 0
        self.y = 0

    def move(self, x: int, y: int) -> None:
        self.x = x
        self.y = y

    def move_rel(self, dx: int, dy: int) -> None:
        self.x += dx
        self.y += dy

    def advance(self, width: int) -> None:
        self.x += width

    def break_line(self) -> None:
        """Next row, back to the left edge."""
        self.x = 0
        self.y += 1
