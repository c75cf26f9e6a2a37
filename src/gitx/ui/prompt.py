"""Interactive prompts on stdin."""

from typing import Optional

from gitx.ui.output import GRAY, NC, YELLOW


def confirm(prompt: str, default: bool = False) -> bool:
    """Ask a yes/no question. Enter, EOF and Ctrl-C all take the default."""
    hint = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{prompt} {hint} ").strip().lower()
    except (EOFError, KeyboardInterrupt):
        print()
        return default
    if not answer:
        return default
    return answer in ("y", "yes")


def pick_branch(branches: list[str], prompt: str = "Select a branch") -> Optional[str]:
    """Numbered picker. Returns the chosen branch, or None if the user backs out."""
    if not branches:
        return None
    print(f"{YELLOW}{prompt}{NC}")
    for i, branch in enumerate(branches, 1):
        marker = "*" if i == 1 else " "
        print(f"  {marker} {i}. {branch}")
    print(f"  {GRAY}(Enter for 1, q to cancel){NC}")

    while True:
        try:
            raw = input("  Branch number: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return None
        answer = raw.lower()
        if not answer:
            return branches[0]
        if answer in ("q", "quit"):
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(branches):
            return branches[int(answer) - 1]
        # Typed a branch name directly
        if raw in branches:
            return raw
        print(f"  {GRAY}Enter a number between 1 and {len(branches)}{NC}")
