"""Pytest fixtures for the git MCP server."""

from collections.abc import Callable
from pathlib import Path
import shutil
import subprocess

import pytest

from git_status_mcp.tools.exec import CommandRunner, ExecResult

GIT = shutil.which("git")

requires_git = pytest.mark.skipif(GIT is None, reason="git binary not available")

_GIT_MCP_ENV = (
    "GIT_MCP_CONFIG",
    "GIT_MCP_ENABLED",
    "GIT_MCP_LOG_LEVEL",
    "GIT_MCP_GIT_BINARY",
    "GIT_MCP_EXEC_TIMEOUT",
    "GIT_MCP_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def hermetic_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Autouse: each test runs in its own tmp cwd with a private HOME, a fixed
    git identity, and no GIT_MCP_* overrides leaking in from the shell.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    # Keep repo discovery from walking above the test directory.
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test Author")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "author@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test Author")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "author@example.com")
    for var in _GIT_MCP_ENV:
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True
    )
    return result.stdout


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[..., Path]:
    """Factory for real git repositories with N commits ("commit 1" is oldest)."""

    def factory(name: str = "repo", commits: int = 0, branch: str = "main") -> Path:
        repo = tmp_path / name
        repo.mkdir()
        git(repo, "init", "-q")
        git(repo, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
        git(repo, "config", "commit.gpgsign", "false")
        for i in range(1, commits + 1):
            (repo / f"file{i}.txt").write_text(f"{i}\n")
            git(repo, "add", f"file{i}.txt")
            git(repo, "commit", "-q", "-m", f"commit {i}")
        return repo

    return factory


class RecordingRunner(CommandRunner):
    """Runner that records calls and replays canned results instead of spawning."""

    def __init__(self, results: dict[str, ExecResult] | None = None):
        super().__init__(binary="git", timeout=5)
        self.results = results or {}
        self.calls: list[list[str]] = []

    def run(self, args, cwd, timeout=None):
        self.calls.append(list(args))
        return self.results.get(args[0], ExecResult(stdout="", stderr="", exit_code=0))


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()
