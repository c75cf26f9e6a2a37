"""Branch commands: create, rename, switch, delete, merged cleanup."""

from typing import Callable, Optional, Sequence

from gitx.branch.manager import BranchManager
from gitx.commands.base import Command, DestructiveCommand, DryRunnable
from gitx.exceptions import NotFoundError
from gitx.models.results import (
    BranchCreationResult,
    BranchDeletionResult,
    BranchRenameResult,
    BranchSwitchResult,
    CleanBranchesRequest,
    CleanBranchesResult,
)
from gitx.ui.prompt import pick_branch
from gitx.utils.formatting import fmt_branch_list


class CleanBranchesCommand(DestructiveCommand, DryRunnable):
    name = "clean-branches"
    description = "Delete local branches already merged into the current branch"

    def __init__(
        self,
        manager: BranchManager,
        dry_run: bool = False,
        extra_protected: Sequence[str] = (),
    ):
        super().__init__(manager.safety)
        self.manager = manager
        self.dry_run = dry_run
        self.extra_protected = tuple(extra_protected)

    def destruction_description(self) -> str:
        protected = self.manager.protected_branches(self.extra_protected)
        return f"Delete merged branches except the current one and {', '.join(protected)}"

    def _request(self, dry_run: bool) -> CleanBranchesRequest:
        return CleanBranchesRequest(dry_run=dry_run, extra_protected=self.extra_protected)

    def execute_dry_run(self) -> CleanBranchesResult:
        return self.manager.clean_merged(self._request(dry_run=True))

    def execute(self) -> CleanBranchesResult:
        self.safety.ensure_clean_working_directory()
        return self.manager.clean_merged(self._request(dry_run=False))


class PruneBranchesCommand(CleanBranchesCommand):
    name = "prune-branches"
    description = "Delete merged branches, keeping protected branches and an --except list"


class DeleteBranchesCommand(DestructiveCommand, DryRunnable):
    name = "delete-branch"
    description = "Delete the named local branches"

    def __init__(
        self,
        manager: BranchManager,
        branches: Sequence[str],
        force: bool = False,
        dry_run: bool = False,
    ):
        super().__init__(manager.safety)
        self.manager = manager
        self.branches = list(branches)
        self.force = force
        self.dry_run = dry_run

    def destruction_description(self) -> str:
        mode = "force-delete" if self.force else "delete"
        return f"This will {mode} {len(self.branches)} branches: {fmt_branch_list(self.branches)}"

    def execute_dry_run(self) -> BranchDeletionResult:
        return self.manager.delete_branches(self.branches, force=self.force, dry_run=True)

    def execute(self) -> Optional[BranchDeletionResult]:
        """Returns None when the user declines."""
        if not self.confirm_destruction():
            return None
        return self.manager.delete_branches(self.branches, force=self.force)


class NewBranchCommand(Command):
    name = "new-branch"
    description = "Create a branch and switch to it"

    def __init__(
        self,
        manager: BranchManager,
        branch_name: str,
        from_: Optional[str] = None,
        backup: bool = False,
    ):
        self.manager = manager
        self.branch_name = branch_name
        self.from_ = from_
        self.backup = backup

    def execute(self) -> BranchCreationResult:
        return self.manager.create(self.branch_name, from_=self.from_, backup=self.backup)


class RenameBranchCommand(Command):
    name = "rename-branch"
    description = "Rename the current branch"

    def __init__(
        self,
        manager: BranchManager,
        new_name: str,
        backup: bool = False,
        sync_remote: bool = False,
    ):
        self.manager = manager
        self.new_name = new_name
        self.backup = backup
        self.sync_remote = sync_remote

    def execute(self) -> BranchRenameResult:
        return self.manager.rename(
            self.new_name, backup=self.backup, sync_remote=self.sync_remote
        )


class SwitchRecentCommand(Command):
    """Pick one of the most recently committed branches and switch to it.

    Without a terminal, the most recent branch is taken without asking.
    """

    name = "switch-recent"
    description = "Switch to a recently used branch"

    def __init__(
        self,
        manager: BranchManager,
        interactive: bool,
        limit: int = 10,
        strict: bool = False,
        checkpoint: bool = False,
        picker: Callable[[list[str], str], Optional[str]] = pick_branch,
    ):
        self.manager = manager
        self.interactive = interactive
        self.limit = limit
        self.strict = strict
        self.checkpoint = checkpoint
        self.picker = picker

    def execute(self) -> Optional[BranchSwitchResult]:
        recent = self.manager.recent_branches(limit=self.limit)
        if not recent.branches:
            raise NotFoundError("No recent branches found")

        if self.interactive:
            target = self.picker(recent.branches, "Select a branch to switch to")
            if target is None:
                return None
        else:
            target = recent.branches[0]

        return self.manager.switch(target, strict=self.strict, checkpoint=self.checkpoint)
