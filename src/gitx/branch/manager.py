"""Branch lifecycle: create, rename, switch, delete, and merged-branch cleanup.

Every mutation follows the same path: validate the name, check existence,
run guards (backup, checkpoint, confirmation), then mutate. Validation and
existence failures raise before any mutating git call.
"""

from typing import Iterable, Optional

from gitx.exceptions import ExternalToolError, NotFoundError, StateError
from gitx.git.operations import GitOperations
from gitx.models.results import (
    BranchCreationResult,
    BranchDeletionResult,
    BranchRenameResult,
    BranchSwitchResult,
    CleanBranchesRequest,
    CleanBranchesResult,
    RecentBranchesResult,
)
from gitx.safety import CREATE_BACKUP_PREFIX, RENAME_BACKUP_PREFIX, Safety, SafetyBuilder
from gitx.ui.output import warn
from gitx.validation import validate_branch_name

DEFAULT_PROTECTED_BRANCHES = ("main", "master", "develop")


def parse_except_list(except_: Optional[str]) -> list[str]:
    """Split a comma-separated --except value: 'a, b,,c' -> ['a', 'b', 'c']."""
    if not except_:
        return []
    return [name.strip() for name in except_.split(",") if name.strip()]


def is_protected(branch: str, current_branch: str, protected: Iterable[str]) -> bool:
    """True if branch must never be proposed for deletion."""
    return branch == current_branch or branch in set(protected)


class BranchManager:
    """High-level branch operations with validation and safety checks."""

    def __init__(
        self,
        git: GitOperations,
        safety: Safety,
        protected: Iterable[str] = DEFAULT_PROTECTED_BRANCHES,
    ):
        self.git = git
        self.safety = safety
        self.protected = tuple(protected)

    def protected_branches(self, extra: Iterable[str] = ()) -> list[str]:
        names = list(self.protected)
        for name in extra:
            if name not in names:
                names.append(name)
        return names

    # --- create ---

    def create(
        self, name: str, from_: Optional[str] = None, backup: bool = False
    ) -> BranchCreationResult:
        """Create branch `name` (optionally at `from_`) and switch to it."""
        validate_branch_name(name)

        if from_ is not None and not self.git.commit_exists(from_):
            raise NotFoundError(f"Base branch or ref '{from_}' does not exist")

        if self.git.branch_exists(name):
            raise StateError(f"Branch '{name}' already exists")

        backup_branch = self.safety.create_backup_branch(CREATE_BACKUP_PREFIX) if backup else None

        self.git.checkout_new_branch(name, from_)

        return BranchCreationResult(
            branch_name=name, base_ref=from_, backup_branch=backup_branch, switched=True
        )

    # --- rename ---

    def rename(
        self, new_name: str, backup: bool = False, sync_remote: bool = False, remote: str = "origin"
    ) -> BranchRenameResult:
        """Rename the current branch. Optionally mirror the rename on a remote."""
        validate_branch_name(new_name)

        current = self.git.current_branch()
        if self.git.branch_exists(new_name):
            raise StateError(f"Branch '{new_name}' already exists")

        backup_branch = self.safety.create_backup_branch(RENAME_BACKUP_PREFIX) if backup else None

        self.git.rename_current_branch(new_name)

        remote_synced = False
        if sync_remote:
            self.git.push_branch(remote, new_name)
            try:
                self.git.delete_remote_branch(remote, current)
            except ExternalToolError as e:
                warn(f"Failed to delete old branch '{current}' from {remote}: {e.stderr or e}")
            remote_synced = True

        return BranchRenameResult(
            old_name=current,
            new_name=new_name,
            backup_branch=backup_branch,
            remote_synced=remote_synced,
        )

    # --- switch ---

    def switch(
        self, target: str, strict: bool = False, checkpoint: bool = False
    ) -> BranchSwitchResult:
        if not self.git.branch_exists(target):
            raise NotFoundError(f"Branch '{target}' does not exist")

        if strict and not self.git.is_working_directory_clean():
            raise StateError(
                "Working directory has uncommitted changes. Commit or stash them, or drop --strict."
            )

        previous = self.git.current_branch()

        guarded = SafetyBuilder(self.safety, f"switching to {target}")
        if checkpoint:
            guarded.with_checkpoint()
        result = guarded.execute(lambda: self.git.switch_branch(target))

        return BranchSwitchResult(
            previous_branch=previous, new_branch=target, checkpoint=result.checkpoint
        )

    def recent_branches(
        self, limit: Optional[int] = 10, exclude_current: bool = True, exclude_protected: bool = False
    ) -> RecentBranchesResult:
        current = self.git.current_branch()
        branches = []
        for branch in self.git.recent_branches():
            if exclude_current and branch == current:
                continue
            if exclude_protected and branch in self.protected:
                continue
            branches.append(branch)
        if limit is not None:
            branches = branches[:limit]
        return RecentBranchesResult(branches=branches, current_branch=current)

    # --- delete ---

    def merged_candidates(self, extra_protected: Iterable[str] = ()) -> list[str]:
        """Merged branches minus the current branch and every protected name."""
        current = self.git.current_branch()
        protected = self.protected_branches(extra_protected)
        return [b for b in self.git.merged_branches() if not is_protected(b, current, protected)]

    def clean_merged(self, request: Optional[CleanBranchesRequest] = None) -> CleanBranchesResult:
        """Delete merged branches. Each deletion is isolated: failures land in `failed`."""
        request = request or CleanBranchesRequest()
        candidates = self.merged_candidates(request.extra_protected)

        if not candidates:
            return CleanBranchesResult(dry_run=request.dry_run)

        if request.dry_run:
            return CleanBranchesResult(
                candidates=candidates, deleted=list(candidates), dry_run=True
            )

        if request.confirm_deletion:
            details = (
                f"This will delete {len(candidates)} merged branches: {', '.join(candidates)}"
            )
            if not self.safety.confirm_destructive_operation("Clean merged branches", details):
                return CleanBranchesResult(candidates=candidates, cancelled=True)

        deleted, failed = self._delete_each(candidates, force=False)
        return CleanBranchesResult(candidates=candidates, deleted=deleted, failed=failed)

    def delete_branches(
        self, branches: Iterable[str], force: bool = False, dry_run: bool = False
    ) -> BranchDeletionResult:
        """Delete the given branches; protected names are reported, never deleted."""
        to_delete, protected = [], []
        for branch in branches:
            (protected if branch in self.protected else to_delete).append(branch)

        if dry_run:
            return BranchDeletionResult(deleted=to_delete, protected=protected, dry_run=True)

        deleted, failed = self._delete_each(to_delete, force=force)
        return BranchDeletionResult(deleted=deleted, failed=failed, protected=protected)

    def _delete_each(self, branches: list[str], force: bool) -> tuple[list[str], list[str]]:
        deleted, failed = [], []
        for branch in branches:
            try:
                self.git.delete_branch(branch, force=force)
            except ExternalToolError as e:
                warn(f"Could not delete {branch}: {e.stderr or e}")
                failed.append(branch)
            else:
                deleted.append(branch)
        return deleted, failed
