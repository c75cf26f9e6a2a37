"""Append-only trace of git invocations, enabled by --debug."""

import json
import time
from pathlib import Path

from gitx.ui.output import GRAY, MAGENTA, NC

DEBUG_LOG = Path(".git-x/debug.log")
RULE = "-" * 60


def _render(payload) -> str:
    if isinstance(payload, str):
        return payload
    return json.dumps(payload, indent=2, default=str)


def debug_log(enabled: bool, label: str, payload) -> None:
    """Record one git call (label) and its outcome (payload) when enabled."""
    if not enabled:
        return

    DEBUG_LOG.parent.mkdir(parents=True, exist_ok=True)
    stamp = time.strftime("%Y-%m-%d %H:%M:%S")
    with DEBUG_LOG.open("a") as f:
        f.write(f"{RULE}\n[{stamp}] git-x: {label}\n{_render(payload)}\n")
    print(f"{MAGENTA}[debug]{NC} {label}  {GRAY}-> {DEBUG_LOG}{NC}")
