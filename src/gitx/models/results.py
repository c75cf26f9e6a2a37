"""Request and result models for branch, safety, and bisect operations."""

from dataclasses import dataclass, field
from typing import Any, Optional

from gitx.models.state import BisectState


@dataclass
class GuardedResult:
    """Outcome of a SafetyBuilder run. cancelled means the user declined; value is then None."""

    value: Any = None
    cancelled: bool = False
    backup_branch: Optional[str] = None
    checkpoint: Optional[str] = None


@dataclass
class CleanBranchesRequest:
    dry_run: bool = False
    confirm_deletion: bool = True
    extra_protected: tuple[str, ...] = ()


@dataclass
class CleanBranchesResult:
    """Merged-branch cleanup outcome. In dry run, deleted == candidates and failed is empty."""

    candidates: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    dry_run: bool = False
    cancelled: bool = False


@dataclass
class BranchCreationResult:
    branch_name: str
    base_ref: Optional[str] = None
    backup_branch: Optional[str] = None
    switched: bool = True


@dataclass
class BranchRenameResult:
    old_name: str
    new_name: str
    backup_branch: Optional[str] = None
    remote_synced: bool = False


@dataclass
class BranchSwitchResult:
    previous_branch: str
    new_branch: str
    checkpoint: Optional[str] = None


@dataclass
class BranchDeletionResult:
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    protected: list[str] = field(default_factory=list)
    dry_run: bool = False


@dataclass
class RecentBranchesResult:
    branches: list[str]
    current_branch: str


@dataclass
class BisectStep:
    """Result of one bisect transition (start, good, bad, skip)."""

    action: str
    marked_commit: Optional[str] = None
    current_commit: Optional[str] = None
    remaining_steps: Optional[int] = None
    first_bad_commit: Optional[str] = None

    @property
    def state(self) -> BisectState:
        return BisectState.TERMINAL if self.first_bad_commit else BisectState.ACTIVE


@dataclass
class BisectStatus:
    state: BisectState
    current_commit: Optional[str] = None
    remaining_steps: Optional[int] = None
    log_tail: list[str] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return self.state is not BisectState.IDLE


@dataclass
class BisectReset:
    was_active: bool
