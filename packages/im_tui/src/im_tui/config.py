"""Runtime options for im_tui, with environment overrides."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

APP_NAME = "imtui"

ENV_TICK_MS = f"{APP_NAME.upper()}_TICK_MS"
ENV_QUIT_KEYS = f"{APP_NAME.upper()}_QUIT_KEYS"
ENV_MOUSE_MOTION = f"{APP_NAME.upper()}_MOUSE_MOTION"
ENV_LOG_LEVEL = f"{APP_NAME.upper()}_LOG_LEVEL"
ENV_LOG_FILE = f"{APP_NAME.upper()}_LOG_FILE"

DEFAULT_TICK_MS = 60


class ImTuiOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Frame tick when no input arrives, so hover state still redraws.
    tick_ms: int = Field(default=DEFAULT_TICK_MS, alias="tickMs", gt=0)
    quit_keys: list[str] = Field(default_factory=lambda: ["ctrl+c", "escape"], alias="quitKeys")
    # Report pointer motion without a button held (needed for hover).
    mouse_motion: bool = Field(default=True, alias="mouseMotion")
    log_level: str = Field(default="WARNING", alias="logLevel")
    log_file: str | None = Field(default=None, alias="logFile")

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0


def options_from_env(environ: Mapping[str, str] | None = None) -> ImTuiOptions:
    """Build options from IMTUI_* environment variables.

    Unset variables keep their defaults. Invalid values raise
    pydantic.ValidationError.

    Returns:
        ImTuiOptions
    """
    env = os.environ if environ is None else environ
    values: dict[str, object] = {}

    if env.get(ENV_TICK_MS):
        values["tick_ms"] = env[ENV_TICK_MS]
    if env.get(ENV_QUIT_KEYS):
        values["quit_keys"] = [k.strip() for k in env[ENV_QUIT_KEYS].split(",") if k.strip()]
    if env.get(ENV_MOUSE_MOTION):
        values["mouse_motion"] = env[ENV_MOUSE_MOTION]
    if env.get(ENV_LOG_LEVEL):
        values["log_level"] = env[ENV_LOG_LEVEL].upper()
    if env.get(ENV_LOG_FILE):
        log_file = env[ENV_LOG_FILE]
        if log_file.startswith("~/"):
            log_file = os.path.join(os.path.expanduser("~"), log_file[2:])
        values["log_file"] = log_file

    return ImTuiOptions.model_validate(values)
