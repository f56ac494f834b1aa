"""Exceptions raised by im_tui."""

from __future__ import annotations


class ImTuiError(Exception):
    """Base class for im_tui errors."""


class SurfaceInitError(ImTuiError):
    """The render surface could not be initialised."""


class InputInitError(ImTuiError):
    """The input source could not be started."""
