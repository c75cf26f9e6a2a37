"""User-facing commands and their dispatch."""

from gitx.commands.backups import CleanupBackupsCommand
from gitx.commands.base import Command, DestructiveCommand, DryRunnable, run_command
from gitx.commands.bisect import BISECT_ACTIONS, BisectCommand
from gitx.commands.branch import (
    CleanBranchesCommand,
    DeleteBranchesCommand,
    NewBranchCommand,
    PruneBranchesCommand,
    RenameBranchCommand,
    SwitchRecentCommand,
)

__all__ = [
    # Base
    "Command",
    "DestructiveCommand",
    "DryRunnable",
    "run_command",
    # Branch
    "CleanBranchesCommand",
    "DeleteBranchesCommand",
    "NewBranchCommand",
    "PruneBranchesCommand",
    "RenameBranchCommand",
    "SwitchRecentCommand",
    # Bisect
    "BISECT_ACTIONS",
    "BisectCommand",
    # Backups
    "CleanupBackupsCommand",
]
