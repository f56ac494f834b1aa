"""
Splits raw terminal input into complete sequences.

Reads from stdin can end in the middle of an escape sequence, mouse
reports in particular. An SGR report such as ``\\x1b[<0;20;5M`` may arrive
as ``\\x1b``, ``[<0;2`` and ``0;5M``. SequenceBuffer keeps the partial tail
until it completes, and hands it out as-is on ``flush()`` so a lone ESC
key press is not held forever.
"""

from __future__ import annotations

import re
from typing import Literal

ESC = "\x1b"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_BODY = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def _csi_status(data: str) -> SequenceStatus:
    """CSI: ESC [ params, terminated by a byte in 0x40-0x7E."""
    if len(data) < 3:
        return "incomplete"

    # X10 mouse report: ESC [ M plus three raw bytes
    if data.startswith(f"{ESC}[M"):
        return "complete" if len(data) >= 6 else "incomplete"

    payload = data[2:]
    if not 0x40 <= ord(payload[-1]) <= 0x7E:
        return "incomplete"
    if payload.startswith("<"):
        return "complete" if _SGR_MOUSE_BODY.match(payload) else "incomplete"
    # "ESC [ [ A" style function keys from the Linux console
    if payload == "[":
        return "incomplete"
    return "complete"


def _string_status(data: str) -> SequenceStatus:
    """OSC, DCS and APC: terminated by ST (ESC \\); OSC also by BEL."""
    if data.endswith(f"{ESC}\\"):
        return "complete"
    if data[1] == "]" and data.endswith("\x07"):
        return "complete"
    return "incomplete"


def is_complete_sequence(data: str) -> SequenceStatus:
    """Check if a string is a complete escape sequence or needs more data."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]
    if introducer == "[":
        return _csi_status(data)
    if introducer in "]P_":
        return _string_status(data)
    if introducer == "O":
        # SS3: ESC O and one more character
        return "complete" if len(data) >= 3 else "incomplete"
    # Meta key (ESC + char) or something unknown
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """
    Split accumulated input into complete sequences.

    Returns:
        (sequences, remainder) where remainder is an unfinished escape
        sequence at the end of ``buffer``
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while True:
            if end > len(buffer):
                return sequences, buffer[pos:]
            status = is_complete_sequence(buffer[pos:end])
            if status == "incomplete":
                end += 1
                continue
            break

        # A new ESC inside an unfinished sequence starts a new one
        candidate = buffer[pos:end]
        inner_esc = candidate.find(ESC, 1)
        if inner_esc != -1 and candidate[1] in "[O" and not candidate.endswith(f"{ESC}\\"):
            sequences.append(candidate[:inner_esc])
            pos += inner_esc
            continue

        sequences.append(candidate)
        pos = end

    return sequences, ""


class SequenceBuffer:
    """
    Accumulates input chunks and returns complete sequences.

    Usage:
        buffer = SequenceBuffer()
        for sequence in buffer.feed(chunk):
            handle(sequence)
        # after an idle period:
        for sequence in buffer.flush():
            handle(sequence)
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Unfinished input held back for the next chunk."""
        return self._buffer

    def feed(self, data: str | bytes) -> list[str]:
        """Add a chunk of input; returns the sequences it completed."""
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")
        if not data:
            return []
        sequences, self._buffer = split_sequences(self._buffer + data)
        return sequences

    def flush(self) -> list[str]:
        """Give up waiting for the rest of a partial sequence."""
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._buffer = ""
