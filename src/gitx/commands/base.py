"""Command base classes and the single dispatch point."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from gitx.exceptions import ExternalToolError, StateError
from gitx.git.operations import GitOperations
from gitx.safety import Safety


class Command(ABC):
    """One user-facing operation. Subclasses set name and description."""

    name: str = ""
    description: str = ""
    requires_repo: bool = True
    is_destructive: bool = False

    @abstractmethod
    def execute(self) -> Any: ...


class DestructiveCommand(Command):
    """A command that removes or rewrites state and asks before doing so."""

    is_destructive = True

    def __init__(self, safety: Safety):
        self.safety = safety

    @abstractmethod
    def destruction_description(self) -> str: ...

    def confirm_destruction(self) -> bool:
        return self.safety.confirm_destructive_operation(
            self.name, self.destruction_description()
        )

    def create_backup(self) -> Optional[str]:
        """Called by run_command before execute(); return the backup branch name, if any."""
        return None


class DryRunnable(ABC):
    """Mixin for commands that can report what they would do without doing it.

    execute_dry_run() must compute the same candidates as execute() and never
    issue a mutating git call.
    """

    dry_run: bool = False

    @abstractmethod
    def execute_dry_run(self) -> Any: ...

    def is_dry_run(self) -> bool:
        return self.dry_run


def run_command(command: Command, git: GitOperations) -> Any:
    """Check repository presence when required, then run the command."""
    if command.requires_repo:
        try:
            git.repo_root()
        except ExternalToolError as e:
            raise StateError("Not in a git repository", context={"command": command.name}) from e

    if isinstance(command, DryRunnable) and command.is_dry_run():
        return command.execute_dry_run()
    if isinstance(command, DestructiveCommand):
        command.create_backup()
    return command.execute()
