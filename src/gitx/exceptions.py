"""Error taxonomy for git-x operations."""

from typing import Any, Mapping, Optional, Sequence


class GitXError(Exception):
    """Base exception for git-x."""

    context: dict[str, Any]

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context is not None else {}

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(GitXError, ValueError):
    """Malformed input rejected before any side effect."""

    def __init__(
        self, message: str = "", *, rule: str = "", context: Optional[Mapping[str, Any]] = None
    ) -> None:
        GitXError.__init__(self, message, context=context)
        self.rule = rule


class NotFoundError(GitXError, LookupError):
    """Referenced branch, commit or ref does not exist."""


class StateError(GitXError):
    """Operation not allowed in the current repository state (conflicts, bisect mismatch)."""


class ExternalToolError(GitXError):
    """git exited non-zero for reasons outside this layer's control."""

    def __init__(
        self,
        message: str = "",
        *,
        git_args: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        GitXError.__init__(self, message, context=context)
        self.git_args = list(git_args)
        self.returncode = returncode
        self.stderr = stderr


class GitIOError(GitXError, OSError):
    """git could not be spawned at all."""

    def __init__(self, message: str = "", *, context: Optional[Mapping[str, Any]] = None) -> None:
        GitXError.__init__(self, message, context=context)
