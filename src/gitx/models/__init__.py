"""Data models for git-x."""

from gitx.models.core import BackupBranch, Branch, CleanupEntry
from gitx.models.results import (
    BisectReset,
    BisectStatus,
    BisectStep,
    BranchCreationResult,
    BranchDeletionResult,
    BranchRenameResult,
    BranchSwitchResult,
    CleanBranchesRequest,
    CleanBranchesResult,
    GuardedResult,
    RecentBranchesResult,
)
from gitx.models.state import BisectState, ExecutionContext

__all__ = [
    # Core
    "Branch",
    "BackupBranch",
    "CleanupEntry",
    # Results
    "GuardedResult",
    "CleanBranchesRequest",
    "CleanBranchesResult",
    "BranchCreationResult",
    "BranchRenameResult",
    "BranchSwitchResult",
    "BranchDeletionResult",
    "RecentBranchesResult",
    "BisectStep",
    "BisectStatus",
    "BisectReset",
    # State
    "BisectState",
    "ExecutionContext",
]
