"""
Pointer state tracking across frames.

The tracker keeps exactly two snapshots of the pointer: the current one,
fed by ``update()`` any number of times during a frame, and the one from
the previous frame, captured by ``swap()``. Every "once" query compares the
two, so it is true in a single frame per physical transition.

Key pieces:
- Delta: a current/last pair of values
- Area: inclusive rectangle in character cells
- Pointer: position, buttons and frame-scoped transition queries
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from im_tui.events import BUTTON_PRIMARY

T = TypeVar("T")


@dataclass
class Delta(Generic[T]):
    """A value that may change in each frame."""

    curr: T
    last: T

    def changed(self) -> bool:
        """True in the single frame where the value differs from the last frame."""
        return self.curr != self.last

    def swap(self) -> None:
        """Make the current value the last value."""
        self.last = self.curr

    def set(self, value: T) -> None:
        """Set both current and last value."""
        self.curr = value
        self.last = value


@dataclass(frozen=True)
class Area:
    """Axis-aligned rectangle with inclusive bounds."""

    x1: int
    y1: int
    x2: int
    y2: int

    @classmethod
    def of(cls, x: int, y: int, width: int, height: int = 1) -> Area:
        """
        Build an area from an origin and a size in cells.

        A zero width or height gives an empty area that contains nothing.
        """
        return cls(x, y, x + width - 1, y + height - 1)

    @property
    def width(self) -> int:
        return max(0, self.x2 - self.x1 + 1)

    @property
    def height(self) -> int:
        return max(0, self.y2 - self.y1 + 1)

    def contains(self, x: int, y: int) -> bool:
        return self.x1 <= x <= self.x2 and self.y1 <= y <= self.y2

    def covers(self, other: Area) -> bool:
        """Tell if every cell of ``other`` lies inside this area."""
        return self.contains(other.x1, other.y1) and self.contains(other.x2, other.y2)

    def including(self, x: int, y: int) -> Area:
        """Smallest area containing this one and the cell (x, y)."""
        return Area(min(self.x1, x), min(self.y1, y), max(self.x2, x), max(self.y2, y))


def _primary_down(buttons: int) -> bool:
    return bool(buttons & BUTTON_PRIMARY)


@dataclass
class Pointer:
    """
    Pointer (mouse) state for the current and previous frame.

    Usage:
        pointer = Pointer()
        pointer.update(3, 0, BUTTON_PRIMARY)
        pointer.is_button_down_once()  # True until the next swap()
        pointer.swap()
    """

    x: Delta[int] = field(default_factory=lambda: Delta(-1, -1))
    y: Delta[int] = field(default_factory=lambda: Delta(-1, -1))
    buttons: Delta[int] = field(default_factory=lambda: Delta(0, 0))

    # Where the primary button was last pressed down.
    down_x: int = -1
    down_y: int = -1
    # Every position sampled while the primary button was held, since the
    # last press, fits in this area.
    held_bounds: Area | None = None

    def reset(self) -> None:
        """Forget everything; the pointer is nowhere and no button is held."""
        self.x.set(-1)
        self.y.set(-1)
        self.buttons.set(0)
        self.down_x = -1
        self.down_y = -1
        self.held_bounds = None

    def update(self, x: int, y: int, buttons: int) -> None:
        """
        Ingest one raw sample.

        May be called several times in a frame; the latest sample wins.
        The press-down position is recorded when the primary button goes
        from up to down between two consecutive samples; later samples with
        the button still held widen ``held_bounds``.
        """
        was_down = _primary_down(self.buttons.curr)
        self.x.curr = x
        self.y.curr = y
        self.buttons.curr = buttons
        if not _primary_down(buttons):
            return
        if not was_down:
            self.down_x = x
            self.down_y = y
            self.held_bounds = Area(x, y, x, y)
        elif self.held_bounds is not None:
            self.held_bounds = self.held_bounds.including(x, y)

    def swap(self) -> None:
        """Make current values the last values for the next frame's deltas."""
        self.x.swap()
        self.y.swap()
        self.buttons.swap()

    # -------------------------------------------------------------------------
    # Position queries
    # -------------------------------------------------------------------------

    @property
    def position(self) -> tuple[int, int]:
        return self.x.curr, self.y.curr

    def in_area(self, area: Area) -> bool:
        """Tell if the pointer is inside the area."""
        return area.contains(self.x.curr, self.y.curr)

    def entered(self, area: Area) -> bool:
        """Tell if the pointer moved into the area this frame."""
        return area.contains(self.x.curr, self.y.curr) and not area.contains(
            self.x.last, self.y.last
        )

    def exited(self, area: Area) -> bool:
        """Tell if the pointer moved out of the area this frame."""
        return not area.contains(self.x.curr, self.y.curr) and area.contains(
            self.x.last, self.y.last
        )

    def moved(self) -> bool:
        return self.x.changed() or self.y.changed()

    def dragged(self) -> bool:
        """
        Tell if the pointer is being dragged: the primary button is held
        and the pointer is away from where it was pressed.
        """
        if not self.is_button_down():
            return False
        return self.down_x != self.x.curr or self.down_y != self.y.curr

    # -------------------------------------------------------------------------
    # Button queries
    # -------------------------------------------------------------------------

    def is_button_down(self) -> bool:
        """Primary button held; true in every frame while it is held."""
        return _primary_down(self.buttons.curr)

    def is_button_down_once(self) -> bool:
        """Primary button went down; true in a single frame."""
        return _primary_down(self.buttons.curr) and not _primary_down(self.buttons.last)

    def is_button_up_once(self) -> bool:
        """Primary button was released; true in a single frame."""
        return not _primary_down(self.buttons.curr) and _primary_down(self.buttons.last)

    def is_button_changed(self) -> bool:
        """Any button changed since the last frame."""
        return self.buttons.changed()

    def pressed_in(self, area: Area) -> bool:
        """
        Tell if the primary button was pressed down and released inside
        the area without the pointer leaving it in between. A drag that
        starts elsewhere, ends elsewhere, or leaves and comes back is not
        a press.
        """
        return (
            self.is_button_up_once()
            and self.held_bounds is not None
            and area.contains(self.x.curr, self.y.curr)
            and area.covers(self.held_bounds)
        )
