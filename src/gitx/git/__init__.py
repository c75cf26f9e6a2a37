"""Git executor and typed git operations."""

from gitx.git.executor import GitExecutor, SubprocessExecutor
from gitx.git.operations import GitOperations, parse_branch_listing

__all__ = [
    "GitExecutor",
    "SubprocessExecutor",
    "GitOperations",
    "parse_branch_listing",
]
