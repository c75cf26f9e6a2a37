"""Execution context and bisect session states."""

import os
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Mapping, Optional, TextIO

# Any of these set forces non-interactive (auto-approve) behavior
NON_INTERACTIVE_ENV_VARS = ("GIT_X_NON_INTERACTIVE", "CI", "GITHUB_ACTIONS")
# Any of these set skips the clean working-directory guard
TEST_ENV_VARS = ("CI", "PYTEST_CURRENT_TEST")


class BisectState(Enum):
    """States of a bisect session as seen from this layer."""

    IDLE = auto()  # No BISECT_START marker
    ACTIVE = auto()  # Marker present
    TERMINAL = auto()  # Last verdict announced the first bad commit; still needs reset


@dataclass(frozen=True)
class ExecutionContext:
    """Process-wide interactivity settings, built once at startup and passed down."""

    interactive: bool
    auto_confirm: bool = False
    skip_clean_check: bool = False
    debug: bool = False

    @property
    def should_prompt(self) -> bool:
        return self.interactive and not self.auto_confirm

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        stdin: Optional[TextIO] = None,
        auto_confirm: bool = False,
        debug: bool = False,
    ) -> "ExecutionContext":
        env = os.environ if environ is None else environ
        stream = sys.stdin if stdin is None else stdin
        is_tty = bool(stream is not None and not stream.closed and stream.isatty())
        forced = any(var in env for var in NON_INTERACTIVE_ENV_VARS)
        return cls(
            interactive=is_tty and not forced,
            auto_confirm=auto_confirm,
            skip_clean_check=any(var in env for var in TEST_ENV_VARS),
            debug=debug,
        )

