"""UI components for terminal output and prompts."""

from gitx.ui.output import (
    BLUE,
    CYAN,
    GRAY,
    GREEN,
    MAGENTA,
    NC,
    RED,
    YELLOW,
    detail,
    error,
    log,
    success,
    warn,
)
from gitx.ui.prompt import confirm, pick_branch

__all__ = [
    # Colors
    "RED",
    "GREEN",
    "YELLOW",
    "BLUE",
    "CYAN",
    "GRAY",
    "MAGENTA",
    "NC",
    # Output
    "log",
    "success",
    "warn",
    "error",
    "detail",
    # Prompts
    "confirm",
    "pick_branch",
]
