"""
Keyboard input decoding for legacy terminal sequences.

Key identifiers are lowercase strings such as ``"escape"``, ``"enter"``,
``"up"``, ``"f5"``, ``"a"`` or ``"ctrl+c"``; modifiers are joined with
``+`` and always listed in the order shift, alt, ctrl.

API:
- parse_key(data) - Parse input and return the key identifier
- matches_key(data, key_id) - Check if input matches a key identifier
"""

from __future__ import annotations

import re

SYMBOL_KEYS = {
    "`", "-", "=", "[", "]", "\\", ";", "'", ",", ".", "/",
    "!", "@", "#", "$", "%", "^", "&", "*", "(", ")",
    "_", "+", "|", "~", "{", "}", ":", "<", ">", "?",
}

MODIFIER_ORDER = ("shift", "alt", "ctrl")

# xterm modifier parameter: 1 + (shift=1 | alt=2 | ctrl=4)
MODIFIERS = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

LEGACY_SEQUENCE_KEY_IDS: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[7~": "home",
    "\x1b[4~": "end",
    "\x1b[8~": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
    "\x1bOM": "enter",
    "\x1bOP": "f1",
    "\x1bOQ": "f2",
    "\x1bOR": "f3",
    "\x1bOS": "f4",
    "\x1b[11~": "f1",
    "\x1b[12~": "f2",
    "\x1b[13~": "f3",
    "\x1b[14~": "f4",
    "\x1b[15~": "f5",
    "\x1b[17~": "f6",
    "\x1b[18~": "f7",
    "\x1b[19~": "f8",
    "\x1b[20~": "f9",
    "\x1b[21~": "f10",
    "\x1b[23~": "f11",
    "\x1b[24~": "f12",
}

_CSI_FINAL_KEYS = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

_CSI_TILDE_KEYS = {
    "2": "insert",
    "3": "delete",
    "5": "pageUp",
    "6": "pageDown",
}

_KEY_ALIASES = {
    "esc": "escape",
    "return": "enter",
    "pageup": "pageUp",
    "pagedown": "pageDown",
}

# ESC [ 1 ; <mod> <final>  and  ESC [ <n> ; <mod> ~
_MODIFIED_CSI = re.compile(r"^\x1b\[1;(\d+)([A-DFHPQRS])$")
_MODIFIED_TILDE = re.compile(r"^\x1b\[(\d+);(\d+)~$")


def _with_modifiers(key: str, modifier: int) -> str:
    names = [name for name in MODIFIER_ORDER if modifier & MODIFIERS[name]]
    return "+".join(names + [key])


def _parse_modified_csi(data: str) -> str | None:
    match = _MODIFIED_CSI.match(data)
    if match:
        return _with_modifiers(_CSI_FINAL_KEYS[match.group(2)], int(match.group(1)) - 1)
    match = _MODIFIED_TILDE.match(data)
    if match and match.group(1) in _CSI_TILDE_KEYS:
        return _with_modifiers(_CSI_TILDE_KEYS[match.group(1)], int(match.group(2)) - 1)
    return None


def _parse_single(char: str) -> str | None:
    code = ord(char)
    if code == 0:
        return "ctrl+space"
    if code == 9:
        return "tab"
    if code in (10, 13):
        return "enter"
    if code == 27:
        return "escape"
    if code in (8, 127):
        return "backspace"
    if 1 <= code <= 26:
        return f"ctrl+{chr(code + 96)}"
    if char == " ":
        return "space"
    if char.isalpha() and char.isascii():
        return char.lower() if char.islower() else f"shift+{char.lower()}"
    if char in SYMBOL_KEYS or char.isdigit():
        return char
    return None


def parse_key(data: str) -> str | None:
    """
    Parse input data and return the key identifier.

    Args:
        data: One complete input sequence

    Returns:
        Key identifier string or None if not recognized
    """
    if not data:
        return None

    if data in LEGACY_SEQUENCE_KEY_IDS:
        return LEGACY_SEQUENCE_KEY_IDS[data]

    if len(data) == 1:
        return _parse_single(data)

    # Alt+key arrives as ESC followed by the key
    if len(data) == 2 and data[0] == "\x1b":
        inner = _parse_single(data[1])
        if inner is None or inner == "escape":
            return None
        mods, _, key = inner.rpartition("+")
        names = set(mods.split("+")) if mods else set()
        names.add("alt")
        return "+".join([n for n in MODIFIER_ORDER if n in names] + [key])

    return _parse_modified_csi(data)


def normalize_key_id(key_id: str) -> str:
    """
    Bring a key identifier into canonical form.

    ``"Ctrl+Shift+X"`` becomes ``"shift+ctrl+x"``; ``"esc"`` and ``"return"``
    become ``"escape"`` and ``"enter"``.
    """
    parts = [p for p in key_id.strip().split("+") if p]
    if not parts:
        return ""
    key = _KEY_ALIASES.get(parts[-1].lower(), parts[-1].lower())
    names = {p.lower() for p in parts[:-1]}
    return "+".join([n for n in MODIFIER_ORDER if n in names] + [key])


def matches_key(data: str, key_id: str) -> bool:
    """
    Match input data against a key identifier string.

    Args:
        data: Raw input data from terminal
        key_id: Key identifier (e.g., "ctrl+c", "escape", "shift+up")

    Returns:
        True if the input matches the key identifier
    """
    parsed = parse_key(data)
    if parsed is None:
        return False
    return parsed == normalize_key_id(key_id)
