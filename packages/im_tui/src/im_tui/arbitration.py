"""
Hit area arbitration between widgets drawn in the same frame.

Widgets are evaluated in the order the caller declares them, so a widget
cannot know whether a later one will also claim the pointer. The arbiter
therefore records, during a frame, the last widget whose area contains the
pointer, and grants interaction to the widget that won the previous frame.
For overlapping widgets the last drawn (topmost) wins; widgets below it
see ``over=False`` even though the pointer is inside their area.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable

if TYPE_CHECKING:
    from im_tui.pointer import Area, Pointer


@dataclass(frozen=True)
class InteractionState:
    """What the pointer is doing to one widget this frame."""

    over: bool = False
    active: bool = False
    down: bool = False
    clicked: bool = False


NO_INTERACTION = InteractionState()


class HitArbiter:
    """Per-UI arbitration state; one instance per ImTui."""

    def __init__(self) -> None:
        self._candidate: Hashable | None = None
        self._winner: Hashable | None = None

    @property
    def active(self) -> Hashable | None:
        """Identity entitled to pointer interaction this frame."""
        return self._winner

    def begin_frame(self) -> None:
        self._candidate = None

    def resolve(self, identity: Hashable, area: Area, pointer: Pointer) -> InteractionState:
        """
        Decide how the pointer interacts with the widget ``identity``.

        Args:
            identity: Stable key of the widget
            area: Where the widget is drawn this frame
            pointer: Pointer state for this frame

        Returns:
            InteractionState; all False unless this widget is active
        """
        if not pointer.in_area(area):
            return NO_INTERACTION

        self._candidate = identity
        if identity != self._winner:
            return NO_INTERACTION

        return InteractionState(
            over=True,
            active=True,
            down=pointer.is_button_down(),
            clicked=pointer.pressed_in(area),
        )

    def swap(self) -> None:
        """The last candidate of this frame becomes the next frame's winner."""
        self._winner = self._candidate
