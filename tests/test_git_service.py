"""
Tests for GitService. subprocess.run is replaced, git is never executed.
"""

import subprocess
from typing import List

import pytest

from prautomator.services import git_service
from prautomator.services.git_service import GitCommandError, GitService


class FakeRun:
    """Records git invocations and replays canned results."""

    def __init__(self, stdout: str = "", returncode: int = 0, stderr: str = "", error: Exception = None):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.error = error
        self.commands: List[List[str]] = []

    def __call__(self, cmd, **kwargs):
        self.commands.append(cmd)
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(cmd, self.returncode, stdout=self.stdout, stderr=self.stderr)


@pytest.fixture
def fake_run(monkeypatch):
    def install(**kwargs) -> FakeRun:
        fake = FakeRun(**kwargs)
        monkeypatch.setattr(git_service.subprocess, "run", fake)
        return fake
    return install


def test_changed_files_against_base_ref(fake_run):
    fake = fake_run(stdout="src/a.py\n\nREADME.md\n")

    files = GitService().get_changed_files("origin/develop")

    assert files == ["src/a.py", "README.md"]
    assert fake.commands == [["git", "diff", "--name-only", "origin/develop", "HEAD"]]


def test_changed_files_empty_on_git_error(fake_run):
    fake_run(returncode=128, stderr="fatal: bad revision 'origin/main'")
    assert GitService().get_changed_files() == []


def test_file_diff_keeps_output_verbatim(fake_run):
    diff = "diff --git a/x b/x\n+added\n"
    fake = fake_run(stdout=diff)

    assert GitService().get_file_diff("x") == diff
    assert fake.commands == [["git", "diff", "origin/main", "--", "x"]]


def test_file_diff_raises_on_failure(fake_run):
    fake_run(returncode=1, stderr="fatal: ambiguous argument")
    with pytest.raises(GitCommandError, match="ambiguous argument"):
        GitService().get_file_diff("x")


def test_missing_git_binary(fake_run):
    fake_run(error=FileNotFoundError("git"))
    service = GitService()
    assert service.git_installed() is False
    assert service.is_git_repo() is False
    assert service.current_branch() is None


def test_timeout_becomes_git_command_error(fake_run):
    fake_run(error=subprocess.TimeoutExpired(cmd="git", timeout=1))
    with pytest.raises(GitCommandError):
        GitService(timeout=1).get_file_diff("slow.bin")


def test_repo_detection_and_branch(fake_run):
    fake_run(stdout="true\n")
    assert GitService().is_git_repo() is True

    fake_run(stdout="feature/x\n")
    assert GitService().current_branch() == "feature/x"


def test_commands_run_in_base_dir(tmp_path, monkeypatch):
    seen = {}

    def run(cmd, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(git_service.subprocess, "run", run)
    GitService(base_dir=tmp_path).get_changed_files()

    assert seen["cwd"] == str(tmp_path.resolve())
    assert seen["timeout"] == 30
