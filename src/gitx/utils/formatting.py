"""Formatting utilities for ages and branch lists."""


def fmt_age(seconds: float) -> str:
    """Format an age as a short human string: '45s', '12m', '5h', '3d'."""
    seconds = max(0, int(seconds))
    if seconds < 60:
        return f"{seconds}s"
    elif seconds < 3600:
        return f"{seconds // 60}m"
    elif seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"


def fmt_branch_list(branches: list[str], limit: int = 5) -> str:
    """Comma-join branch names, collapsing the tail: 'a, b, c (+4 more)'."""
    if len(branches) <= limit:
        return ", ".join(branches)
    shown = ", ".join(branches[:limit])
    return f"{shown} (+{len(branches) - limit} more)"
