"""
Widget showcase for im_tui.

Run from a terminal with mouse support:
    python examples/demo.py

Quit with Esc or Ctrl+C. Set IMTUI_LOG_FILE=demo.log to see the loop's log.
"""

from im_tui import ImTui, Ref


def main() -> None:
    tui = ImTui()

    clicks = 0
    toggle = Ref(False)
    toggler = Ref(False)
    one, two = Ref(False), Ref(False)
    radio = Ref(-1)

    for _ in tui.loop():
        if tui.button(" Button "):
            clicks += 1
        tui.text(f" Button clicked {clicks} times")

        tui.break_line()
        tui.toggle(" Toggle ", toggle)
        if toggle.value:
            tui.text(" Toggled ")

        tui.break_line()
        tui.toggler("█  ", "  █", "", toggler)
        if toggler.value:
            tui.text(" Toggled ")

        tui.break_line()
        tui.check("One ", one)
        tui.check("Two ", two)
        tui.text(f" One: {one.value}, Two: {two.value} ")

        tui.break_line()
        tui.radio("One ", 0, radio)
        tui.radio("Two ", 1, radio)
        tui.text(f" Selected: {radio.value} ")

        width, height = tui.size()
        tui.move(0, height - 1)
        tui.text(f" {width}x{height}  Esc to quit ")


if __name__ == "__main__":
    main()
