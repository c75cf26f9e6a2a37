"""Shared test fixtures."""

import subprocess

import pytest

from gitx.branch.manager import BranchManager
from gitx.git.operations import GitOperations
from gitx.models.state import ExecutionContext
from gitx.safety import Safety


def completed(args, returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(["git", *args], returncode, stdout=stdout, stderr=stderr)


class FakeGit:
    """Scripted GitExecutor that records every call.

    Exact argument lists can be scripted with `on()`; a scripted response queue
    pops until its last entry, which then repeats. Unscripted calls answer from a
    tiny repository model (current branch, existing branches and commits) or
    succeed with empty output.
    """

    def __init__(self, current="main", branches=("main",), commits=()):
        self.current = current
        self.branches = set(branches)
        self.commits = set(commits)
        self.calls: list[list[str]] = []
        self.responses: dict[tuple, list] = {}

    def on(self, *args, stdout="", stderr="", returncode=0):
        self.responses.setdefault(tuple(args), []).append(
            completed(args, returncode, stdout, stderr)
        )
        return self

    def run(self, args):
        args = list(args)
        self.calls.append(args)
        queue = self.responses.get(tuple(args))
        if queue:
            return queue.pop(0) if len(queue) > 1 else queue[0]
        if args[:3] == ["show-ref", "--verify", "--quiet"]:
            name = args[3].removeprefix("refs/heads/")
            return completed(args, 0 if name in self.branches else 1)
        if args[:3] == ["rev-parse", "--verify", "--quiet"]:
            ref = args[3].removesuffix("^{commit}")
            return completed(args, 0 if ref in self.commits | self.branches else 1)
        if args == ["rev-parse", "--abbrev-ref", "HEAD"]:
            return completed(args, stdout=f"{self.current}\n")
        return completed(args)

    def called(self, *args) -> bool:
        return list(args) in self.calls

    def calls_starting_with(self, *prefix) -> list[list[str]]:
        return [c for c in self.calls if c[: len(prefix)] == list(prefix)]

    def mutating_calls(self) -> list[list[str]]:
        mutating = []
        for call in self.calls:
            cmd, rest = call[0], call[1:]
            if cmd in ("checkout", "stash", "push"):
                mutating.append(call)
            elif cmd == "branch" and rest and rest[0] not in ("--merged", "--list"):
                mutating.append(call)
            elif cmd == "bisect" and rest and rest[0] not in ("view", "log"):
                mutating.append(call)
        return mutating


@pytest.fixture
def fake_git():
    return FakeGit(current="feature", branches=("main", "feature"))


@pytest.fixture
def git(fake_git):
    return GitOperations(fake_git)


@pytest.fixture
def context():
    """Non-interactive context that still enforces the clean-directory guard."""
    return ExecutionContext(interactive=False)


@pytest.fixture
def interactive_context():
    return ExecutionContext(interactive=True)


@pytest.fixture
def safety(git, context):
    return Safety(git, context)


@pytest.fixture
def manager(git, safety):
    return BranchManager(git, safety)


@pytest.fixture
def reset_config_cache():
    import gitx.config.settings as settings

    settings._config = None
    settings._loaded_sources = []
    yield
    settings._config = None
    settings._loaded_sources = []


@pytest.fixture
def mock_subprocess(mocker):
    """Mock subprocess.run returning success by default."""
    mock = mocker.patch("subprocess.run")
    mock.return_value = subprocess.CompletedProcess([], 0, stdout="", stderr="")
    return mock
