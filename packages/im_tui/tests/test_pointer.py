"""
Tests for im_tui/pointer.py - pointer state across frames.
"""

import pytest

from im_tui.events import BUTTON_NONE, BUTTON_PRIMARY, BUTTON_SECONDARY
from im_tui.pointer import Area, Delta, Pointer


class TestDelta:
    def test_changed_until_swap(self):
        d = Delta(0, 0)
        d.curr = 5
        assert d.changed()
        d.swap()
        assert not d.changed()
        assert d.last == 5

    def test_set_updates_both(self):
        d = Delta(1, 2)
        d.set(7)
        assert d.curr == d.last == 7


class TestArea:
    def test_of_single_row(self):
        a = Area.of(2, 3, 4)
        assert a == Area(2, 3, 5, 3)
        assert a.width == 4
        assert a.height == 1

    @pytest.mark.parametrize("x, y, expected", [
        (2, 3, True),
        (5, 3, True),
        (6, 3, False),
        (1, 3, False),
        (3, 2, False),
        (3, 4, False),
    ])
    def test_contains_inclusive_bounds(self, x, y, expected):
        assert Area.of(2, 3, 4).contains(x, y) is expected

    def test_zero_width_is_empty(self):
        a = Area.of(0, 0, 0)
        assert a.width == 0
        assert not a.contains(0, 0)
        assert not a.contains(-1, 0)


class TestPointerInitialState:
    def test_starts_outside_screen(self):
        p = Pointer()
        assert p.position == (-1, -1)
        assert not p.in_area(Area.of(0, 0, 10))

    def test_once_queries_false_before_first_swap(self):
        p = Pointer()
        assert not p.is_button_down_once()
        assert not p.is_button_up_once()
        assert not p.is_button_changed()
        assert not p.pressed_in(Area.of(0, 0, 10))

    def test_reset(self):
        p = Pointer()
        p.update(3, 3, BUTTON_PRIMARY)
        p.swap()
        p.reset()
        assert p.position == (-1, -1)
        assert not p.is_button_down()
        assert not p.moved()
        assert (p.down_x, p.down_y) == (-1, -1)


class TestButtonTransitions:
    def test_down_once_true_in_exactly_one_frame(self):
        p = Pointer()
        seen = []
        for _ in range(4):
            p.update(1, 1, BUTTON_PRIMARY)
            seen.append(p.is_button_down_once())
            p.swap()
        assert seen == [True, False, False, False]

    def test_button_down_every_frame_while_held(self):
        p = Pointer()
        seen = []
        for _ in range(3):
            p.update(1, 1, BUTTON_PRIMARY)
            seen.append(p.is_button_down())
            p.swap()
        assert seen == [True, True, True]

    def test_up_once_true_in_exactly_one_frame(self):
        p = Pointer()
        p.update(1, 1, BUTTON_PRIMARY)
        p.swap()
        seen = []
        for _ in range(3):
            p.update(1, 1, BUTTON_NONE)
            seen.append(p.is_button_up_once())
            p.swap()
        assert seen == [True, False, False]

    def test_secondary_button_is_not_primary(self):
        p = Pointer()
        p.update(1, 1, BUTTON_SECONDARY)
        assert not p.is_button_down()
        assert not p.is_button_down_once()
        assert p.is_button_changed()
        p.swap()
        p.update(1, 1, BUTTON_NONE)
        assert not p.is_button_up_once()

    def test_multiple_updates_in_a_frame_coalesce(self):
        p = Pointer()
        p.update(0, 0, BUTTON_NONE)
        p.update(4, 2, BUTTON_NONE)
        p.update(5, 2, BUTTON_PRIMARY)
        assert p.position == (5, 2)
        assert p.is_button_down_once()
        assert (p.down_x, p.down_y) == (5, 2)

    def test_press_position_recorded_on_sample_transition(self):
        p = Pointer()
        p.update(2, 0, BUTTON_PRIMARY)
        # Dragging within the same frame keeps the first press position.
        p.update(8, 0, BUTTON_PRIMARY)
        assert (p.down_x, p.down_y) == (2, 0)


class TestPressedIn:
    area = Area.of(0, 0, 8)

    def _press_release(self, down_at, up_at):
        p = Pointer()
        p.update(*down_at, BUTTON_PRIMARY)
        p.swap()
        p.update(*up_at, BUTTON_NONE)
        return p

    def test_press_and_release_inside(self):
        assert self._press_release((1, 0), (6, 0)).pressed_in(self.area)

    def test_release_outside(self):
        assert not self._press_release((1, 0), (12, 0)).pressed_in(self.area)

    def test_press_outside_release_inside(self):
        assert not self._press_release((12, 0), (3, 0)).pressed_in(self.area)

    def test_drag_out_and_back_is_not_a_press(self):
        p = Pointer()
        p.update(1, 0, BUTTON_PRIMARY)
        p.swap()
        p.update(20, 5, BUTTON_PRIMARY)
        assert p.dragged()
        p.swap()
        p.update(2, 0, BUTTON_NONE)
        assert not p.pressed_in(self.area)

    def test_only_on_release_frame(self):
        p = self._press_release((1, 0), (1, 0))
        assert p.pressed_in(self.area)
        p.swap()
        p.update(1, 0, BUTTON_NONE)
        assert not p.pressed_in(self.area)


class TestMotion:
    area = Area.of(5, 0, 3)

    def test_entered_and_exited(self):
        p = Pointer()
        p.update(0, 0, BUTTON_NONE)
        p.swap()
        p.update(6, 0, BUTTON_NONE)
        assert p.entered(self.area)
        assert not p.exited(self.area)
        p.swap()
        p.update(6, 0, BUTTON_NONE)
        assert not p.entered(self.area)
        p.swap()
        p.update(9, 0, BUTTON_NONE)
        assert p.exited(self.area)

    def test_moved(self):
        p = Pointer()
        p.update(1, 1, BUTTON_NONE)
        assert p.moved()
        p.swap()
        p.update(1, 1, BUTTON_NONE)
        assert not p.moved()

    def test_still_press_is_not_a_drag(self):
        p = Pointer()
        p.update(3, 3, BUTTON_PRIMARY)
        assert not p.dragged()

    def test_no_drag_without_button(self):
        p = Pointer()
        p.update(3, 3, BUTTON_PRIMARY)
        p.swap()
        p.update(9, 3, BUTTON_NONE)
        assert not p.dragged()


class TestHeldBounds:
    area = Area.of(0, 0, 8)

    def test_leaving_within_one_frame_is_not_a_press(self):
        p = Pointer()
        p.update(1, 0, BUTTON_PRIMARY)
        p.swap()
        p.update(30, 0, BUTTON_PRIMARY)
        p.update(2, 0, BUTTON_PRIMARY)
        p.update(2, 0, BUTTON_NONE)
        assert not p.pressed_in(self.area)

    def test_bounds_grow_while_held(self):
        p = Pointer()
        p.update(3, 1, BUTTON_PRIMARY)
        p.update(1, 2, BUTTON_PRIMARY)
        p.update(5, 0, BUTTON_PRIMARY)
        assert p.held_bounds == Area(1, 0, 5, 2)

    def test_new_press_starts_new_bounds(self):
        p = Pointer()
        p.update(30, 0, BUTTON_PRIMARY)
        p.update(30, 0, BUTTON_NONE)
        p.swap()
        p.update(2, 0, BUTTON_PRIMARY)
        p.swap()
        p.update(4, 0, BUTTON_NONE)
        assert p.held_bounds == Area(2, 0, 2, 0)
        assert p.pressed_in(self.area)

    def test_release_without_press_is_not_a_press(self):
        p = Pointer()
        p.buttons.set(BUTTON_PRIMARY)
        p.update(2, 0, BUTTON_NONE)
        assert p.is_button_up_once()
        assert not p.pressed_in(self.area)

    def test_reset_forgets_bounds(self):
        p = Pointer()
        p.update(2, 0, BUTTON_PRIMARY)
        p.reset()
        assert p.held_bounds is None


class TestAreaBounds:
    def test_covers(self):
        outer = Area.of(0, 0, 8, 2)
        assert outer.covers(Area(1, 0, 7, 1))
        assert not outer.covers(Area(1, 0, 8, 0))

    def test_including(self):
        assert Area(2, 2, 2, 2).including(0, 5) == Area(0, 2, 2, 5)
