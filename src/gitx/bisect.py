"""Bisect session: a thin state machine over `git bisect`.

The session is ACTIVE while <git-dir>/BISECT_START exists. A good/bad/skip
verdict whose output names the first bad commit moves it to TERMINAL; the
marker stays until reset.
"""

import math
from pathlib import Path
from typing import Optional

from gitx.exceptions import NotFoundError, StateError
from gitx.git.operations import GitOperations
from gitx.models.results import BisectReset, BisectStatus, BisectStep
from gitx.models.state import BisectState
from gitx.validation import validate_ref

BISECT_MARKER = "BISECT_START"
FIRST_BAD_PHRASE = "is the first bad commit"
FIRST_BAD_LOG_PREFIX = "# first bad commit:"
LOG_TAIL_LINES = 5


def parse_bisect_result(output: str) -> Optional[str]:
    """First bad commit hash from `git bisect good|bad|skip` output, if found."""
    for line in output.split("\n"):
        if FIRST_BAD_PHRASE in line:
            tokens = line.split()
            return tokens[0] if tokens else None
    return None


def estimate_remaining_steps(candidates: int) -> int:
    """ceil(log2(N)) tests left to isolate one commit among N candidates."""
    if candidates <= 1:
        return 0
    return math.ceil(math.log2(candidates))


class BisectSession:
    def __init__(self, git: GitOperations):
        self.git = git

    def is_active(self) -> bool:
        git_dir = self.git.git_dir()
        if git_dir is None:
            return False
        return (Path(git_dir) / BISECT_MARKER).exists()

    def state(self) -> BisectState:
        if not self.is_active():
            return BisectState.IDLE
        if self._log_names_first_bad(self._log_lines()):
            return BisectState.TERMINAL
        return BisectState.ACTIVE

    def remaining_steps(self) -> Optional[int]:
        """Estimated steps left, or None when git cannot list the candidates."""
        result = self.git.execute(["bisect", "view", "--pretty=oneline"])
        if result.returncode != 0:
            return None
        lines = [line for line in (result.stdout or "").split("\n") if line.strip()]
        return estimate_remaining_steps(len(lines))

    # --- transitions ---

    def start(self, good: str, bad: str) -> BisectStep:
        if self.is_active():
            raise StateError("Already in bisect mode. Run 'git x bisect reset' first.")

        validate_ref(good)
        validate_ref(bad)
        for ref in (good, bad):
            if not self.git.commit_exists(ref):
                raise NotFoundError(f"Commit '{ref}' does not exist", context={"ref": ref})

        output = self.git.run(["bisect", "start", bad, good], "Starting bisect")
        first_bad = parse_bisect_result(output)
        if first_bad:
            return BisectStep("start", first_bad_commit=first_bad, remaining_steps=0)

        return BisectStep(
            "start",
            current_commit=self.git.commit_summary(),
            remaining_steps=self.remaining_steps(),
        )

    def good(self) -> BisectStep:
        return self._mark("good")

    def bad(self) -> BisectStep:
        return self._mark("bad")

    def skip(self) -> BisectStep:
        return self._mark("skip")

    def reset(self) -> BisectReset:
        """Leave bisect mode. Resetting an idle session is a no-op."""
        if not self.is_active():
            return BisectReset(was_active=False)
        self.git.run(["bisect", "reset"], "Resetting bisect")
        return BisectReset(was_active=True)

    def status(self) -> BisectStatus:
        if not self.is_active():
            return BisectStatus(state=BisectState.IDLE)

        lines = self._log_lines()
        state = BisectState.TERMINAL if self._log_names_first_bad(lines) else BisectState.ACTIVE
        return BisectStatus(
            state=state,
            current_commit=self.git.commit_summary(),
            remaining_steps=0 if state is BisectState.TERMINAL else self.remaining_steps(),
            log_tail=lines[:LOG_TAIL_LINES],
        )

    # --- internals ---

    def _mark(self, verdict: str) -> BisectStep:
        if not self.is_active():
            raise StateError(
                "Not currently bisecting. Run 'git x bisect start <good> <bad>' first."
            )

        marked = self.git.commit_summary()
        output = self.git.run(["bisect", verdict], f"Marking commit as {verdict}")

        first_bad = parse_bisect_result(output)
        if first_bad:
            return BisectStep(
                verdict, marked_commit=marked, first_bad_commit=first_bad, remaining_steps=0
            )
        return BisectStep(
            verdict,
            marked_commit=marked,
            current_commit=self.git.commit_summary(),
            remaining_steps=self.remaining_steps(),
        )

    def _log_lines(self) -> list[str]:
        output = self.git.run(["bisect", "log"], "Reading bisect log")
        return [line for line in output.split("\n") if line.strip()]

    @staticmethod
    def _log_names_first_bad(lines: list[str]) -> bool:
        return any(line.startswith(FIRST_BAD_LOG_PREFIX) for line in lines)
