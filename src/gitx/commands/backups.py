from typing import Optional

from gitx.commands.base import DestructiveCommand, DryRunnable
from gitx.models.core import CleanupEntry
from gitx.safety import Safety
from gitx.utils.formatting import fmt_branch_list


class CleanupBackupsCommand(DestructiveCommand, DryRunnable):
    name = "cleanup-backups"
    description = "Delete backup branches older than a retention period"

    def __init__(self, safety: Safety, days: int, dry_run: bool = False):
        super().__init__(safety)
        self.days = days
        self.dry_run = dry_run
        self._stale: list[str] = []

    def destruction_description(self) -> str:
        return (
            f"This will delete {len(self._stale)} backup branches older than "
            f"{self.days} days: {fmt_branch_list(self._stale)}"
        )

    def execute_dry_run(self) -> list[CleanupEntry]:
        return self.safety.cleanup_old_backups(self.days, dry_run=True)

    def execute(self) -> Optional[list[CleanupEntry]]:
        """Returns None when the user declines."""
        self._stale = [entry.branch for entry in self.execute_dry_run()]
        if not self._stale:
            return []
        if not self.confirm_destruction():
            return None
        return self.safety.cleanup_old_backups(self.days)
