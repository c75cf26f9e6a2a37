"""Typed git queries and primitive mutations over an injected executor."""

import subprocess
from typing import Optional, Sequence

from gitx.exceptions import ExternalToolError
from gitx.git.executor import GitExecutor, SubprocessExecutor


def parse_branch_listing(output: str) -> list[str]:
    """Parse `git branch` output: strip '*' (current) and '+' (worktree) markers.

    Detached-HEAD pseudo entries like '(HEAD detached at abc123)' are dropped.
    """
    branches = []
    for line in output.split("\n"):
        name = line.strip().lstrip("*+ ")
        if name and not name.startswith("("):
            branches.append(name)
    return branches


class GitOperations:
    """Every git call made by git-x goes through one of these methods."""

    def __init__(self, executor: Optional[GitExecutor] = None):
        self.executor = executor or SubprocessExecutor()

    # --- plumbing ---

    def execute(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        return self.executor.run(list(args))

    def run(self, args: Sequence[str], what: str = "") -> str:
        """Run git and return stripped stdout. Raises ExternalToolError on non-zero exit."""
        result = self.execute(args)
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            label = what or f"git {' '.join(args)}"
            raise ExternalToolError(
                f"{label} failed: {stderr}" if stderr else f"{label} failed",
                git_args=args,
                returncode=result.returncode,
                stderr=stderr,
            )
        return (result.stdout or "").strip()

    def succeeds(self, args: Sequence[str]) -> bool:
        return self.execute(args).returncode == 0

    # --- queries ---

    def repo_root(self) -> str:
        return self.run(["rev-parse", "--show-toplevel"], "Locating repository root")

    def git_dir(self) -> Optional[str]:
        """Path of the .git directory, or None outside a repository."""
        result = self.execute(["rev-parse", "--absolute-git-dir"])
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def current_branch(self) -> str:
        """Current branch name ('HEAD' when detached)."""
        return self.run(["rev-parse", "--abbrev-ref", "HEAD"], "Reading current branch")

    def branch_exists(self, name: str) -> bool:
        return self.succeeds(["show-ref", "--verify", "--quiet", f"refs/heads/{name}"])

    def commit_exists(self, ref: str) -> bool:
        return self.succeeds(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"])

    def merged_branches(self) -> list[str]:
        return parse_branch_listing(self.run(["branch", "--merged"], "Listing merged branches"))

    def list_branches(self, pattern: str) -> list[str]:
        """List local branches matching a glob pattern (e.g. 'backup/*')."""
        return parse_branch_listing(self.run(["branch", "--list", pattern], "Listing branches"))

    def recent_branches(self) -> list[str]:
        """Local branches, most recently committed first."""
        output = self.run(
            ["for-each-ref", "--sort=-committerdate", "--format=%(refname:short)", "refs/heads/"],
            "Listing recent branches",
        )
        return [b.strip() for b in output.split("\n") if b.strip()]

    def is_working_directory_clean(self) -> bool:
        return not self.run(["status", "--porcelain"], "Reading working tree status")

    def last_commit_timestamp(self, ref: str) -> int:
        """Unix committer timestamp of the tip of ref."""
        raw = self.run(["log", "-1", "--format=%ct", ref], f"Reading date of '{ref}'")
        try:
            return int(raw)
        except ValueError:
            raise ExternalToolError(
                f"Invalid timestamp for '{ref}': {raw!r}", git_args=["log", "-1", ref]
            ) from None

    def commit_summary(self, ref: str = "HEAD") -> str:
        """'<short hash> <subject>' of ref."""
        return self.run(["log", "-1", "--pretty=format:%h %s", ref], "Reading commit info")

    # --- mutations ---

    def create_branch(self, name: str, start: Optional[str] = None) -> None:
        """Create a branch pointer without switching to it."""
        args = ["branch", name] + ([start] if start else [])
        self.run(args, f"Creating branch '{name}'")

    def checkout_new_branch(self, name: str, start: Optional[str] = None) -> None:
        args = ["checkout", "-b", name] + ([start] if start else [])
        self.run(args, f"Creating and switching to '{name}'")

    def rename_current_branch(self, new_name: str) -> None:
        self.run(["branch", "-m", new_name], f"Renaming branch to '{new_name}'")

    def switch_branch(self, name: str) -> None:
        self.run(["checkout", name], f"Switching to '{name}'")

    def delete_branch(self, name: str, force: bool = False) -> None:
        self.run(["branch", "-D" if force else "-d", name], f"Deleting branch '{name}'")

    def stash_push(self, message: str) -> None:
        self.run(["stash", "push", "-m", message], "Creating safety checkpoint")

    def stash_pop(self) -> None:
        self.run(["stash", "pop"], "Restoring safety checkpoint")

    def push_branch(self, remote: str, branch: str) -> None:
        self.run(["push", "-u", remote, branch], f"Pushing '{branch}' to {remote}")

    def delete_remote_branch(self, remote: str, branch: str) -> None:
        self.run(["push", remote, "--delete", branch], f"Deleting '{branch}' from {remote}")
