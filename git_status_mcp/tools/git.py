"""
Git tools for the MCP server.

- git-status: porcelain status, current branch and remotes
- git-log: most recent commits in one-line form
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

from git_status_mcp.errors import ExternalToolError
from git_status_mcp.registry import ToolDescriptor
from git_status_mcp.schema import ArgSpec
from git_status_mcp.tools.exec import CommandRunner

logger = logging.getLogger("git-mcp.git")

DEFAULT_LOG_COUNT = 10

CLEAN_TREE_TEXT = "Working directory clean - no changes detected"
NO_REMOTES_TEXT = "No remotes configured"
NO_COMMITS_TEXT = "No commits to show"
DETACHED_HEAD_TEXT = "(detached HEAD)"

DIRECTORY_ARG = "directory"


@dataclass(frozen=True)
class GitStatusArgs:
    directory: str | None = None


@dataclass(frozen=True)
class GitLogArgs:
    directory: str | None = None
    count: int = DEFAULT_LOG_COUNT


GIT_STATUS = ToolDescriptor(
    name="git-status",
    description="Get the current git status of the repository",
    params=(
        ArgSpec(
            name=DIRECTORY_ARG,
            type="string",
            description="Directory path to check git status (defaults to current directory)",
        ),
    ),
    args_type=GitStatusArgs,
)

GIT_LOG = ToolDescriptor(
    name="git-log",
    description="Get recent git commit history",
    params=(
        ArgSpec(
            name=DIRECTORY_ARG,
            type="string",
            description="Directory path to check git log (defaults to current directory)",
        ),
        ArgSpec(
            name="count",
            type="integer",
            description="Number of recent commits to show (default: 10)",
            default=DEFAULT_LOG_COUNT,
            minimum=0,
        ),
    ),
    args_type=GitLogArgs,
)


def resolve_directory(directory: str | None) -> str:
    """Empty or missing directory means the process working directory."""
    return directory if directory else os.getcwd()


def _git(runner: CommandRunner, args: list[str], cwd: str) -> str:
    """Run one git sub-command and return stdout, raising on failure."""
    command = runner.describe(args)
    result = runner.run(args, cwd)

    if result.timed_out:
        raise ExternalToolError(f"Command timed out after {runner.timeout}s: {command}")
    if not result.success:
        detail = result.stderr.strip() or result.stdout.strip()
        message = f"Command failed: {command} (exit code {result.exit_code})"
        if detail:
            message += f"\n{detail}"
        raise ExternalToolError(message)

    logger.debug(f"{command} ok in {result.duration_ms:.1f}ms")
    return result.stdout


def git_status(args: GitStatusArgs, runner: CommandRunner) -> str:
    cwd = resolve_directory(args.directory)

    # Sequential on purpose: output order is status, branch, remotes.
    status = _git(runner, ["status", "--porcelain=v1"], cwd)
    branch = _git(runner, ["branch", "--show-current"], cwd).strip()
    remotes = _git(runner, ["remote", "-v"], cwd)

    lines = [
        f"Git Status for: {cwd}",
        f"Current branch: {branch or DETACHED_HEAD_TEXT}",
        "",
        "Status:",
        status.rstrip("\n") if status.strip() else CLEAN_TREE_TEXT,
        "",
        "Remotes:",
        remotes.rstrip("\n") if remotes.strip() else NO_REMOTES_TEXT,
    ]
    return "\n".join(lines) + "\n"


def git_log(args: GitLogArgs, runner: CommandRunner) -> str:
    cwd = resolve_directory(args.directory)
    log = _git(runner, ["log", "--oneline", "-n", str(args.count)], cwd)

    text = f"Recent Git Commits ({args.count} most recent):\n\n"
    if not log.strip():
        return text + NO_COMMITS_TEXT + "\n"
    return text + log
