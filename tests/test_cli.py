"""Tests for gitx.cli."""

import pytest
from conftest import FakeGit

from gitx.cli import build_command, main, parse_args, report_error
from gitx.commands import (
    BisectCommand,
    CleanupBackupsCommand,
    NewBranchCommand,
    PruneBranchesCommand,
    SwitchRecentCommand,
)
from gitx.exceptions import StateError, ValidationError
from gitx.git.operations import GitOperations
from gitx.models.state import ExecutionContext

CONFIG = {
    "protected_branches": ["main", "trunk"],
    "backup": {"prefix": "backup", "retention_days": 14},
    "checkpoint": {"message": "git-x safety checkpoint"},
    "recent": {"limit": 3},
}


@pytest.fixture
def cli_git(mocker):
    """Route main() through a FakeGit and a fixed config."""
    fake = FakeGit(current="main", branches=("main", "feature"))
    mocker.patch("gitx.cli.SubprocessExecutor", return_value=fake)
    mocker.patch("gitx.cli.get_config", return_value=CONFIG)
    return fake


def command_for(*argv):
    args = parse_args(list(argv))
    git = GitOperations(FakeGit())
    return build_command(args, ExecutionContext(interactive=False), git, CONFIG)


class TestParseArgs:
    def test_clean_branches(self):
        args = parse_args(["clean-branches", "--dry-run"])
        assert args.command == "clean-branches"
        assert args.dry_run is True
        assert args.yes is False

    def test_prune_except(self):
        args = parse_args(["prune-branches", "--except", "a,b", "-y"])
        assert args.except_ == "a,b"
        assert args.yes is True

    def test_new_branch_from(self):
        args = parse_args(["new-branch", "feature/x", "--from", "develop", "--backup"])
        assert (args.branch_name, args.from_, args.backup) == ("feature/x", "develop", True)

    def test_bisect_start(self):
        args = parse_args(["bisect", "start", "v1.0", "HEAD"])
        assert (args.action, args.good, args.bad) == ("start", "v1.0", "HEAD")

    def test_global_debug(self):
        assert parse_args(["--debug", "bisect", "status"]).debug is True

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            parse_args(["--version"])
        assert exc.value.code == 0
        assert "git-x" in capsys.readouterr().out


class TestBuildCommand:
    def test_prune_extends_protected(self):
        cmd = command_for("prune-branches", "--except", "keep, also")
        assert isinstance(cmd, PruneBranchesCommand)
        assert cmd.extra_protected == ("keep", "also")
        assert cmd.manager.protected == ("main", "trunk")

    def test_new_branch(self):
        cmd = command_for("new-branch", "x", "--from", "main")
        assert isinstance(cmd, NewBranchCommand)
        assert cmd.from_ == "main"

    def test_switch_recent_uses_configured_limit(self):
        cmd = command_for("switch-recent", "--checkpoint")
        assert isinstance(cmd, SwitchRecentCommand)
        assert cmd.limit == 3
        assert cmd.checkpoint is True

    def test_bisect_status(self):
        cmd = command_for("bisect", "status")
        assert isinstance(cmd, BisectCommand)
        assert cmd.action == "status"

    def test_cleanup_defaults_to_retention_days(self):
        cmd = command_for("cleanup-backups")
        assert isinstance(cmd, CleanupBackupsCommand)
        assert cmd.days == 14

    def test_cleanup_negative_days(self):
        with pytest.raises(ValidationError):
            command_for("cleanup-backups", "--days", "-1")


class TestMain:
    def test_dry_run_lists_candidates(self, cli_git, capsys):
        cli_git.on("branch", "--merged", stdout="* main\n  feature\n  trunk\n")
        main(["clean-branches", "--dry-run"])
        out = capsys.readouterr().out
        assert "Would delete 1 merged branches" in out
        assert "feature" in out
        assert cli_git.mutating_calls() == []

    def test_new_branch(self, cli_git, capsys):
        main(["new-branch", "feature/x"])
        assert cli_git.called("checkout", "-b", "feature/x")
        assert "Created and switched to branch 'feature/x'" in capsys.readouterr().out

    def test_invalid_branch_name_exits_1_with_rules(self, cli_git, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["new-branch", "bad name"])
        assert exc.value.code == 1
        out = capsys.readouterr().out
        assert "invalid characters" in out
        assert "Cannot contain spaces" in out
        assert cli_git.mutating_calls() == []

    def test_outside_repository_exits_1(self, cli_git, capsys):
        cli_git.on("rev-parse", "--show-toplevel", returncode=128, stderr="fatal: not a git repo")
        with pytest.raises(SystemExit) as exc:
            main(["clean-branches"])
        assert exc.value.code == 1
        assert "Not in a git repository" in capsys.readouterr().out

    def test_bisect_status_idle(self, cli_git, capsys):
        cli_git.on("rev-parse", "--absolute-git-dir", returncode=128)
        main(["bisect", "status"])
        assert "Not currently bisecting" in capsys.readouterr().out

    def test_cancel_exits_cleanly(self, cli_git, mocker, capsys):
        mocker.patch("gitx.cli.run_command", return_value=None)
        main(["delete-branch", "feature"])
        assert "cancelled" in capsys.readouterr().out


class TestReportError:
    def test_prints_notes(self, capsys):
        err = StateError("boom")
        err.add_note("Checkpoint restore also failed: conflict")
        report_error(err)
        out = capsys.readouterr().out
        assert "boom" in out
        assert "restore also failed" in out

    def test_rules_only_for_branch_names(self, capsys):
        report_error(ValidationError("bad config", rule="config"))
        assert "Cannot contain" not in capsys.readouterr().out
