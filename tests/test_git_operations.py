"""Tests for gitx.git.executor and gitx.git.operations."""

import subprocess

import pytest
from conftest import FakeGit

from gitx.exceptions import ExternalToolError, GitIOError
from gitx.git.executor import SubprocessExecutor
from gitx.git.operations import GitOperations, parse_branch_listing
from gitx.models.state import ExecutionContext


class TestParseBranchListing:
    def test_strips_markers(self):
        output = "  develop\n* main\n+ worktree-branch\n"
        assert parse_branch_listing(output) == ["develop", "main", "worktree-branch"]

    def test_drops_detached_head(self):
        output = "* (HEAD detached at abc123)\n  main\n"
        assert parse_branch_listing(output) == ["main"]

    def test_empty(self):
        assert parse_branch_listing("") == []


class TestSubprocessExecutor:
    def test_runs_git_with_args(self, mock_subprocess):
        SubprocessExecutor(cwd="/repo").run(["status", "--porcelain"])
        mock_subprocess.assert_called_once_with(
            ["git", "status", "--porcelain"], capture_output=True, text=True, cwd="/repo"
        )

    def test_nonzero_exit_is_returned(self, mock_subprocess):
        mock_subprocess.return_value = subprocess.CompletedProcess([], 128, stdout="", stderr="fatal")
        result = SubprocessExecutor().run(["rev-parse"])
        assert result.returncode == 128

    def test_spawn_failure_raises_io_error(self, mocker):
        mocker.patch("subprocess.run", side_effect=FileNotFoundError("git"))
        with pytest.raises(GitIOError) as exc:
            SubprocessExecutor(git="/missing/git").run(["status"])
        assert isinstance(exc.value, OSError)

    def test_debug_logs_each_call(self, mock_subprocess, mocker):
        debug_mock = mocker.patch("gitx.git.executor.debug_log")
        executor = SubprocessExecutor(context=ExecutionContext(interactive=False, debug=True))
        executor.run(["branch", "--merged"])
        assert debug_mock.call_args[0][0] is True
        assert debug_mock.call_args[0][1] == "git branch --merged"


class TestRun:
    def test_returns_stripped_stdout(self):
        fake = FakeGit().on("rev-parse", "--show-toplevel", stdout="/repo\n")
        assert GitOperations(fake).repo_root() == "/repo"

    def test_failure_carries_stderr(self):
        fake = FakeGit().on("branch", "-d", "x", returncode=1, stderr="error: not fully merged\n")
        with pytest.raises(ExternalToolError) as exc:
            GitOperations(fake).delete_branch("x")
        assert exc.value.stderr == "error: not fully merged"
        assert exc.value.returncode == 1
        assert exc.value.git_args == ["branch", "-d", "x"]
        assert "not fully merged" in str(exc.value)


class TestQueries:
    def test_current_branch(self):
        assert GitOperations(FakeGit(current="dev")).current_branch() == "dev"

    def test_branch_exists(self):
        git = GitOperations(FakeGit(branches=("main",)))
        assert git.branch_exists("main")
        assert not git.branch_exists("nope")

    def test_commit_exists_uses_commit_peel(self):
        fake = FakeGit(commits=("abc123",))
        assert GitOperations(fake).commit_exists("abc123")
        assert fake.called("rev-parse", "--verify", "--quiet", "abc123^{commit}")

    def test_git_dir_none_outside_repo(self):
        fake = FakeGit().on("rev-parse", "--absolute-git-dir", returncode=128)
        assert GitOperations(fake).git_dir() is None

    def test_merged_branches(self):
        fake = FakeGit().on("branch", "--merged", stdout="* main\n  feature/a\n  feature/b\n")
        assert GitOperations(fake).merged_branches() == ["main", "feature/a", "feature/b"]

    def test_recent_branches(self):
        fake = FakeGit().on(
            "for-each-ref",
            "--sort=-committerdate",
            "--format=%(refname:short)",
            "refs/heads/",
            stdout="b\na\n\nc\n",
        )
        assert GitOperations(fake).recent_branches() == ["b", "a", "c"]

    def test_clean_working_directory(self):
        assert GitOperations(FakeGit()).is_working_directory_clean()

    def test_dirty_working_directory(self):
        fake = FakeGit().on("status", "--porcelain", stdout=" M file.py\n")
        assert not GitOperations(fake).is_working_directory_clean()

    def test_last_commit_timestamp(self):
        fake = FakeGit().on("log", "-1", "--format=%ct", "main", stdout="1700000000\n")
        assert GitOperations(fake).last_commit_timestamp("main") == 1700000000

    def test_last_commit_timestamp_unparseable(self):
        fake = FakeGit().on("log", "-1", "--format=%ct", "main", stdout="garbage\n")
        with pytest.raises(ExternalToolError, match="Invalid timestamp"):
            GitOperations(fake).last_commit_timestamp("main")


class TestMutations:
    def test_create_branch_with_start(self):
        fake = FakeGit()
        GitOperations(fake).create_branch("x", "main")
        assert fake.calls == [["branch", "x", "main"]]

    def test_delete_branch_force(self):
        fake = FakeGit()
        GitOperations(fake).delete_branch("x", force=True)
        assert fake.calls == [["branch", "-D", "x"]]

    def test_stash_push(self):
        fake = FakeGit()
        GitOperations(fake).stash_push("checkpoint")
        assert fake.calls == [["stash", "push", "-m", "checkpoint"]]

    def test_delete_remote_branch(self):
        fake = FakeGit()
        GitOperations(fake).delete_remote_branch("origin", "old")
        assert fake.calls == [["push", "origin", "--delete", "old"]]
