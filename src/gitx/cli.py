"""CLI entry point and argument parsing."""

import argparse
import sys
import time
from typing import Any, Callable, Optional, Sequence

from gitx import __version__
from gitx.bisect import BisectSession
from gitx.branch import BranchManager, parse_except_list
from gitx.commands import (
    BisectCommand,
    CleanBranchesCommand,
    CleanupBackupsCommand,
    Command,
    DeleteBranchesCommand,
    NewBranchCommand,
    PruneBranchesCommand,
    RenameBranchCommand,
    SwitchRecentCommand,
    run_command,
)
from gitx.config import (
    backup_prefix,
    backup_retention_days,
    checkpoint_message,
    get_config,
    protected_branches,
    recent_limit,
)
from gitx.exceptions import GitXError, ValidationError
from gitx.git import GitOperations, SubprocessExecutor
from gitx.models import (
    BackupBranch,
    BisectReset,
    BisectState,
    BisectStatus,
    BisectStep,
    BranchCreationResult,
    BranchDeletionResult,
    BranchRenameResult,
    BranchSwitchResult,
    CleanBranchesResult,
    CleanupEntry,
    ExecutionContext,
)
from gitx.safety import Safety
from gitx.ui import CYAN, GREEN, NC, RED, YELLOW, detail, error, log, success, warn
from gitx.utils.debug import DEBUG_LOG
from gitx.utils.formatting import fmt_age, fmt_branch_list
from gitx.validation import BRANCH_NAME_RULES

BRANCH_RULE_KEYS = ("empty", "leading-dash", "reserved", "invalid-chars", "double-dot")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="git-x",
        description="Safety-guarded branch and bisect operations for git.",
        epilog="""
Examples:
  %(prog)s clean-branches --dry-run     Show merged branches that would be deleted
  %(prog)s prune-branches --except dev  Delete merged branches, keeping 'dev'
  %(prog)s new-branch feat/x --from main
  %(prog)s rename-branch feat/y --remote
  %(prog)s switch-recent --checkpoint
  %(prog)s bisect start v1.0 HEAD
  %(prog)s cleanup-backups --days 14

Safety:
  - Destructive commands ask for confirmation in a terminal (default: no)
  - Outside a terminal (CI, GIT_X_NON_INTERACTIVE, piped stdin) they proceed with a warning
  - Protected branches (config: protected_branches) and the current branch are never deleted
  - --backup leaves a <prefix>/<branch>_<timestamp> branch behind as an undo anchor
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help=f"Enable debug mode - logs every git call to {DEBUG_LOG}",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    p = sub.add_parser("clean-branches", help="Delete branches merged into the current branch")
    p.add_argument("--dry-run", action="store_true", help="Show what would be deleted")
    p.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")

    p = sub.add_parser("prune-branches", help="Delete merged branches with extra exclusions")
    p.add_argument(
        "--except",
        dest="except_",
        metavar="A,B",
        help="Comma-separated branches to keep in addition to protected ones",
    )
    p.add_argument("--dry-run", action="store_true", help="Show what would be deleted")
    p.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")

    p = sub.add_parser("delete-branch", help="Delete the named local branches")
    p.add_argument("branches", nargs="+", metavar="BRANCH")
    p.add_argument("--force", action="store_true", help="Delete even if not merged (-D)")
    p.add_argument("--dry-run", action="store_true", help="Show what would be deleted")
    p.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")

    p = sub.add_parser("new-branch", help="Create a branch and switch to it")
    p.add_argument("branch_name", metavar="NAME")
    p.add_argument("--from", dest="from_", metavar="REF", help="Start point (default: HEAD)")
    p.add_argument("--backup", action="store_true", help="Create a backup branch first")

    p = sub.add_parser("rename-branch", help="Rename the current branch")
    p.add_argument("new_name", metavar="NAME")
    p.add_argument("--backup", action="store_true", help="Create a backup branch first")
    p.add_argument(
        "--remote", action="store_true", help="Push the new name to origin and delete the old one"
    )

    p = sub.add_parser("switch-recent", help="Switch to a recently used branch")
    p.add_argument("--strict", action="store_true", help="Refuse to switch with uncommitted changes")
    p.add_argument(
        "--checkpoint", action="store_true", help="Stash uncommitted changes before switching"
    )

    p = sub.add_parser("bisect", help="Binary search for the commit that introduced a bug")
    actions = p.add_subparsers(dest="action", metavar="ACTION", required=True)
    start = actions.add_parser("start", help="Start bisecting between a good and a bad commit")
    start.add_argument("good", metavar="GOOD")
    start.add_argument("bad", metavar="BAD")
    actions.add_parser("good", help="Mark the current commit as good")
    actions.add_parser("bad", help="Mark the current commit as bad")
    actions.add_parser("skip", help="Skip the current commit (untestable)")
    actions.add_parser("reset", help="End the bisect session")
    actions.add_parser("status", help="Show bisect progress")

    p = sub.add_parser(
        "cleanup-backups",
        help="Delete old backup branches (backup prefix, safety/, pre-create/, pre-rename/)",
    )
    p.add_argument(
        "--days",
        type=int,
        metavar="N",
        help="Delete backups older than N days (default: backup.retention_days)",
    )
    p.add_argument("--dry-run", action="store_true", help="Show what would be deleted")

    return parser.parse_args(argv)


def build_command(
    args: argparse.Namespace, context: ExecutionContext, git: GitOperations, config: dict
) -> Command:
    safety = Safety(
        git,
        context,
        backup_prefix=backup_prefix(config),
        checkpoint_message=checkpoint_message(config),
    )
    manager = BranchManager(git, safety, protected=protected_branches(config))

    if args.command == "clean-branches":
        return CleanBranchesCommand(manager, dry_run=args.dry_run)
    if args.command == "prune-branches":
        return PruneBranchesCommand(
            manager, dry_run=args.dry_run, extra_protected=parse_except_list(args.except_)
        )
    if args.command == "delete-branch":
        return DeleteBranchesCommand(
            manager, args.branches, force=args.force, dry_run=args.dry_run
        )
    if args.command == "new-branch":
        return NewBranchCommand(manager, args.branch_name, from_=args.from_, backup=args.backup)
    if args.command == "rename-branch":
        return RenameBranchCommand(
            manager, args.new_name, backup=args.backup, sync_remote=args.remote
        )
    if args.command == "switch-recent":
        return SwitchRecentCommand(
            manager,
            interactive=context.interactive,
            limit=recent_limit(config),
            strict=args.strict,
            checkpoint=args.checkpoint,
        )
    if args.command == "bisect":
        return BisectCommand(
            BisectSession(git),
            args.action,
            good=getattr(args, "good", None),
            bad=getattr(args, "bad", None),
        )
    if args.command == "cleanup-backups":
        days = args.days if args.days is not None else backup_retention_days(config)
        if days < 0:
            raise ValidationError("--days must be a non-negative integer", rule="days")
        return CleanupBackupsCommand(safety, days, dry_run=args.dry_run)
    raise ValidationError(f"Unknown command '{args.command}'", rule="command")


# --- rendering ---


def print_clean_result(command: CleanBranchesCommand, result: CleanBranchesResult) -> None:
    if result.cancelled:
        log("Operation cancelled by user.")
        return
    if not result.candidates:
        success("No merged branches to delete.")
        return
    if result.dry_run:
        log(f"[DRY RUN] Would delete {len(result.deleted)} merged branches:")
        for branch in result.deleted:
            detail(branch)
        return
    for branch in result.deleted:
        print(f"  {GREEN}Deleted{NC} {branch}")
    for branch in result.failed:
        print(f"  {RED}Failed{NC}  {branch}")
    if result.failed:
        warn(f"Deleted {len(result.deleted)} branches, {len(result.failed)} failed.")
    else:
        success(f"Deleted {len(result.deleted)} merged branches.")


def print_deletion_result(command: DeleteBranchesCommand, result: BranchDeletionResult) -> None:
    if result.protected:
        warn(f"Skipped protected branches: {fmt_branch_list(result.protected)}")
    if result.dry_run:
        log(f"[DRY RUN] Would delete: {fmt_branch_list(result.deleted) or 'nothing'}")
        return
    if result.deleted:
        success(f"Deleted {len(result.deleted)} branches: {fmt_branch_list(result.deleted)}")
    if result.failed:
        error(f"Failed to delete: {fmt_branch_list(result.failed)}")


def print_creation_result(command: NewBranchCommand, result: BranchCreationResult) -> None:
    if result.backup_branch:
        detail(f"Backup: {result.backup_branch}")
    base = f" from {result.base_ref}" if result.base_ref else ""
    success(f"Created and switched to branch '{result.branch_name}'{base}")


def print_rename_result(command: RenameBranchCommand, result: BranchRenameResult) -> None:
    if result.backup_branch:
        detail(f"Backup: {result.backup_branch}")
    success(f"Renamed branch '{result.old_name}' to '{result.new_name}'")
    if result.remote_synced:
        detail(f"Pushed '{result.new_name}' to origin")


def print_switch_result(command: SwitchRecentCommand, result: BranchSwitchResult) -> None:
    if result.checkpoint:
        detail(f"Checkpoint stashed: {result.checkpoint}")
    success(f"Switched from '{result.previous_branch}' to '{result.new_branch}'")


def _print_bisect_hints() -> None:
    print(f"\n{YELLOW}Test this commit and run:{NC}")
    print(f"  {GREEN}git x bisect good{NC}   if the commit is good")
    print(f"  {RED}git x bisect bad{NC}    if the commit is bad")
    print(f"  {YELLOW}git x bisect skip{NC}   if the commit is untestable")


def _print_remaining(steps: Optional[int]) -> None:
    if steps is None:
        detail("Remaining steps: unknown")
    else:
        detail(f"Approximately {steps} steps remaining")


def print_bisect_result(command: BisectCommand, result: Any) -> None:
    if isinstance(result, BisectReset):
        if result.was_active:
            success("Bisect session ended; back on your original branch.")
        else:
            log("Not currently bisecting.")
        return

    if isinstance(result, BisectStatus):
        if result.state is BisectState.IDLE:
            log("Not currently bisecting.")
            return
        log(f"Bisect {'finished' if result.state is BisectState.TERMINAL else 'in progress'}")
        detail(f"Current commit: {result.current_commit}")
        _print_remaining(result.remaining_steps)
        if result.log_tail:
            print(f"\n{CYAN}Recent bisect log:{NC}")
            for line in result.log_tail:
                print(f"  {line}")
        return

    step: BisectStep = result
    if step.action == "start":
        log(f"Starting bisect between {command.good} (good) and {command.bad} (bad)")
    elif step.marked_commit:
        verdict = {"good": "good", "bad": "bad", "skip": "skipped (untestable)"}[step.action]
        log(f"Marked {step.marked_commit} as {verdict}")

    if step.state is BisectState.TERMINAL:
        success(f"Found the first bad commit: {step.first_bad_commit}")
        detail("Run 'git x bisect reset' to return to your original branch")
        return
    detail(f"Checked out commit: {step.current_commit}")
    _print_remaining(step.remaining_steps)
    _print_bisect_hints()


def print_cleanup_result(command: CleanupBackupsCommand, result: list[CleanupEntry]) -> None:
    if not result:
        success(f"No backup branches older than {command.days} days.")
        return
    now = time.time()
    for entry in result:
        backup = BackupBranch.parse(entry.branch)
        age = f" ({fmt_age(now - backup.created_at.timestamp())} old)" if backup else ""
        print(f"  {entry}{age}")
    failed = sum(1 for e in result if e.action == "failed")
    if failed:
        warn(f"{failed} backup branches could not be deleted.")


RENDERERS: dict[type, Callable[[Any, Any], None]] = {
    CleanBranchesCommand: print_clean_result,
    PruneBranchesCommand: print_clean_result,
    DeleteBranchesCommand: print_deletion_result,
    NewBranchCommand: print_creation_result,
    RenameBranchCommand: print_rename_result,
    SwitchRecentCommand: print_switch_result,
    BisectCommand: print_bisect_result,
    CleanupBackupsCommand: print_cleanup_result,
}


def report_error(e: GitXError) -> None:
    error(str(e))
    if isinstance(e, ValidationError) and e.rule in BRANCH_RULE_KEYS:
        print("Branch names:")
        for rule in BRANCH_NAME_RULES:
            detail(rule)
    for note in getattr(e, "__notes__", []):
        detail(note)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    context = ExecutionContext.from_env(auto_confirm=getattr(args, "yes", False), debug=args.debug)

    try:
        config = get_config()
        git = GitOperations(SubprocessExecutor(context=context))
        command = build_command(args, context, git, config)
        result = run_command(command, git)
    except GitXError as e:
        report_error(e)
        sys.exit(1)

    if result is None:
        log("Operation cancelled.")
        return
    RENDERERS[type(command)](command, result)
