"""Safety guards for destructive operations: backups, checkpoints, confirmation.

Guards are composed with SafetyBuilder and always run in the same order:
clean-directory check, backup branch, checkpoint, confirmation. A declined
confirmation is a cancelled result, not an error. If the guarded operation
raises after a checkpoint was taken, exactly one restore is attempted and the
original exception still propagates.
"""

import time
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from gitx.exceptions import ExternalToolError, GitXError, StateError
from gitx.git.operations import GitOperations
from gitx.models.core import BackupBranch, Branch, CleanupEntry
from gitx.models.results import GuardedResult
from gitx.models.state import ExecutionContext
from gitx.ui.output import log, warn
from gitx.ui.prompt import confirm
from gitx.validation import validate_branch_name

T = TypeVar("T")

DEFAULT_BACKUP_PREFIX = "backup"
GUARD_BACKUP_PREFIX = "safety"
CREATE_BACKUP_PREFIX = "pre-create"
RENAME_BACKUP_PREFIX = "pre-rename"
DEFAULT_CHECKPOINT_MESSAGE = "git-x safety checkpoint"
SECONDS_PER_DAY = 86400


class Safety:
    """Backup, checkpoint and confirmation primitives bound to one repository."""

    def __init__(
        self,
        git: GitOperations,
        context: ExecutionContext,
        confirm_fn: Callable[[str, bool], bool] = confirm,
        backup_prefix: str = DEFAULT_BACKUP_PREFIX,
        checkpoint_message: str = DEFAULT_CHECKPOINT_MESSAGE,
    ):
        self.git = git
        self.context = context
        self.confirm_fn = confirm_fn
        self.backup_prefix = backup_prefix
        self.checkpoint_message = checkpoint_message

    # --- backups ---

    def create_backup_branch(self, prefix: Optional[str] = None) -> str:
        """Create <prefix>/<current branch>_<UTC timestamp> at the current commit."""
        current = self.git.current_branch()
        name = BackupBranch.make_name(
            prefix or self.backup_prefix, current, datetime.now(timezone.utc)
        )
        validate_branch_name(name)
        try:
            self.git.create_branch(name)
        except ExternalToolError as e:
            raise ExternalToolError(
                f"Failed to create backup branch '{name}': {e.stderr or e}",
                git_args=e.git_args,
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e
        log(f"Created backup branch {name}")
        return name

    @property
    def backup_prefixes(self) -> list[str]:
        """Every prefix git-x writes backups under, configured prefix first."""
        prefixes = [self.backup_prefix]
        for prefix in (GUARD_BACKUP_PREFIX, CREATE_BACKUP_PREFIX, RENAME_BACKUP_PREFIX):
            if prefix not in prefixes:
                prefixes.append(prefix)
        return prefixes

    def list_backup_branches(self, prefix: Optional[str] = None) -> list[Branch]:
        """Backups under `prefix`, or under every prefix git-x writes when omitted."""
        prefixes = [prefix] if prefix else self.backup_prefixes
        return [Branch(name=n) for p in prefixes for n in self.git.list_branches(f"{p}/*")]

    def is_branch_older_than(self, branch: str, days: int) -> bool:
        cutoff = time.time() - days * SECONDS_PER_DAY
        return self.git.last_commit_timestamp(branch) < cutoff

    def cleanup_old_backups(self, days: int, dry_run: bool = False) -> list[CleanupEntry]:
        """Delete (or report, in dry run) backups whose tip is older than `days`.

        One failed deletion never stops the sweep; every stale backup gets an entry.
        """
        entries = []
        for branch in self.list_backup_branches():
            if not self.is_branch_older_than(branch.name, days):
                continue
            if dry_run:
                entries.append(CleanupEntry(branch.name, "would-delete"))
                continue
            try:
                self.git.delete_branch(branch.name, force=True)
            except ExternalToolError as e:
                warn(f"Could not delete {branch.name}: {e.stderr or e}")
                entries.append(CleanupEntry(branch.name, "failed"))
            else:
                entries.append(CleanupEntry(branch.name, "deleted"))
        return entries

    # --- working directory ---

    def ensure_clean_working_directory(self) -> None:
        if self.context.skip_clean_check:
            return
        if not self.git.is_working_directory_clean():
            raise StateError(
                "Working directory is not clean. Please commit or stash your changes first."
            )

    # --- confirmation ---

    def confirm_destructive_operation(self, operation: str, details: str) -> bool:
        """Prompt in a terminal (default no); auto-approve, with a warning, everywhere else."""
        if self.context.auto_confirm:
            log(f"{operation}: confirmed by --yes")
            return True
        if not self.context.interactive:
            warn(f"{operation}: skipping confirmation in non-interactive environment")
            return True
        prompt = f"{operation}: this is a destructive operation.\n{details}\nDo you want to continue?"
        return self.confirm_fn(prompt, False)

    # --- checkpoints ---

    def create_checkpoint(self, message: Optional[str] = None) -> str:
        """Stash uncommitted changes under message. Left in place if the operation succeeds."""
        msg = message or self.checkpoint_message
        self.git.stash_push(msg)
        return msg

    def restore_checkpoint(self) -> None:
        self.git.stash_pop()


class SafetyBuilder:
    """Fluent guard composition around one operation.

    SafetyBuilder(safety, "Rewrite history").with_backup().with_confirmation().execute(fn)
    """

    def __init__(self, safety: Safety, operation_name: str):
        self.safety = safety
        self.operation_name = operation_name
        self.backup_needed = False
        self.checkpoint_needed = False
        self.confirmation_needed = False
        self.clean_directory_needed = False

    def with_backup(self) -> "SafetyBuilder":
        self.backup_needed = True
        return self

    def with_checkpoint(self) -> "SafetyBuilder":
        self.checkpoint_needed = True
        return self

    def with_confirmation(self) -> "SafetyBuilder":
        self.confirmation_needed = True
        return self

    def with_clean_directory(self) -> "SafetyBuilder":
        self.clean_directory_needed = True
        return self

    def execute(self, operation: Callable[[], T]) -> GuardedResult:
        if self.clean_directory_needed:
            self.safety.ensure_clean_working_directory()

        backup = None
        if self.backup_needed:
            backup = self.safety.create_backup_branch(GUARD_BACKUP_PREFIX)

        checkpoint = None
        if self.checkpoint_needed:
            checkpoint = self.safety.create_checkpoint(f"Before {self.operation_name}")

        if self.confirmation_needed:
            details = (
                f"A backup branch '{backup}' has been created."
                if backup
                else "No backup will be created."
            )
            if not self.safety.confirm_destructive_operation(self.operation_name, details):
                log("Operation cancelled by user.")
                return GuardedResult(cancelled=True, backup_branch=backup, checkpoint=checkpoint)

        try:
            value = operation()
        except Exception as e:
            if checkpoint is not None:
                self._restore_after_failure(e)
            raise
        return GuardedResult(value=value, backup_branch=backup, checkpoint=checkpoint)

    def _restore_after_failure(self, original: Exception) -> None:
        try:
            self.safety.restore_checkpoint()
        except GitXError as restore_err:
            warn(f"Failed to restore checkpoint: {restore_err}")
            original.add_note(f"Checkpoint restore also failed: {restore_err}")
