"""Tests for promptspine.core.git."""

import subprocess

from promptspine.core import git
from promptspine.core.git import GitInfo, capture_git_state


class TestCaptureGitState:
    """Test git metadata capture."""

    def test_returns_info(self, monkeypatch):
        outputs = {"HEAD": "abc123def456", "--abbrev-ref": "main"}

        def fake_git(args, repo_dir):
            return outputs[args[1]]

        monkeypatch.setattr(git, "_git", fake_git)
        assert capture_git_state() == GitInfo(commit="abc123def456", branch="main")

    def test_none_outside_repository(self, monkeypatch):
        def fake_git(args, repo_dir):
            raise subprocess.CalledProcessError(128, ["git", *args])

        monkeypatch.setattr(git, "_git", fake_git)
        assert capture_git_state() is None

    def test_none_without_git_binary(self, monkeypatch):
        def fake_git(args, repo_dir):
            raise FileNotFoundError("git")

        monkeypatch.setattr(git, "_git", fake_git)
        assert capture_git_state() is None

    def test_non_repo_directory(self, tmp_path):
        assert capture_git_state(tmp_path) is None
