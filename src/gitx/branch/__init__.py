"""Branch lifecycle engine."""

from gitx.branch.manager import (
    DEFAULT_PROTECTED_BRANCHES,
    BranchManager,
    is_protected,
    parse_except_list,
)

__all__ = [
    "DEFAULT_PROTECTED_BRANCHES",
    "BranchManager",
    "is_protected",
    "parse_except_list",
]
