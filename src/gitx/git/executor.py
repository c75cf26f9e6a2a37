"""Narrow interface for running git as a subprocess."""

import subprocess
from typing import Optional, Protocol, Sequence

from gitx.exceptions import GitIOError
from gitx.models.state import ExecutionContext
from gitx.utils.debug import debug_log


class GitExecutor(Protocol):
    """Runs one git subcommand and returns its exit status and output."""

    def run(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        """Run `git <args>`. Never raises on non-zero exit."""


class SubprocessExecutor:
    """Blocking GitExecutor backed by subprocess.run."""

    def __init__(
        self,
        git: str = "git",
        cwd: Optional[str] = None,
        context: Optional[ExecutionContext] = None,
    ):
        self.git = git
        self.cwd = cwd
        self.debug = context.debug if context else False

    def run(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        cmd = [self.git, *args]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, cwd=self.cwd)
        except OSError as e:
            raise GitIOError(f"Could not run {self.git}: {e}", context={"args": cmd}) from e
        debug_log(
            self.debug,
            " ".join(cmd),
            {"returncode": result.returncode, "stdout": result.stdout, "stderr": result.stderr},
        )
        return result
