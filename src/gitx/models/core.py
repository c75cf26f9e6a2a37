"""Core domain models."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal, Optional

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
_BACKUP_RE = re.compile(r"^(?P<prefix>.+?)/(?P<source>.+)_(?P<stamp>\d{8}_\d{6})$")


@dataclass
class Branch:
    """A local branch. is_merged is never stored; ask git when needed."""

    name: str
    is_current: bool = False
    is_protected: bool = False


@dataclass
class BackupBranch:
    """A branch created as an undo anchor: <prefix>/<source>_<UTC timestamp>."""

    name: str
    prefix: str
    source: str
    created_at: datetime

    @staticmethod
    def make_name(prefix: str, source: str, now: Optional[datetime] = None) -> str:
        stamp = (now or datetime.now(timezone.utc)).strftime(BACKUP_TIMESTAMP_FORMAT)
        return f"{prefix}/{source}_{stamp}"

    @classmethod
    def parse(cls, name: str) -> Optional["BackupBranch"]:
        """Parse a backup branch name. Returns None if it doesn't follow the convention."""
        match = _BACKUP_RE.match(name)
        if not match:
            return None
        try:
            created = datetime.strptime(match.group("stamp"), BACKUP_TIMESTAMP_FORMAT)
        except ValueError:
            return None
        return cls(
            name=name,
            prefix=match.group("prefix"),
            source=match.group("source"),
            created_at=created.replace(tzinfo=timezone.utc),
        )


@dataclass
class CleanupEntry:
    """Outcome of one branch in a backup cleanup sweep."""

    branch: str
    action: Literal["would-delete", "deleted", "failed"]

    def __str__(self) -> str:
        if self.action == "would-delete":
            return f"[DRY RUN] Would delete: {self.branch}"
        if self.action == "deleted":
            return f"Deleted: {self.branch}"
        return f"Failed to delete: {self.branch}"
