"""
Command execution for the git MCP server.

Runs a single external binary with:
- Execution timeout (child is killed on expiry)
- Working directory enforcement
- Full buffering of stdout/stderr
- stdin detached from the protocol stream
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import shlex
import subprocess
import time

from git_status_mcp.errors import ExecutionError

logger = logging.getLogger("git-mcp.exec")

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ExecResult:
    """Result from command execution."""

    stdout: str
    stderr: str
    exit_code: int
    timed_out: bool = False
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


class CommandRunner:
    """Runs one external binary (git by default) against a working directory."""

    def __init__(self, binary: str = "git", timeout: float = DEFAULT_TIMEOUT):
        self.binary = binary
        self.timeout = timeout

    def describe(self, args: list[str]) -> str:
        """Render the command line for messages and logs."""
        return " ".join(shlex.quote(part) for part in [self.binary, *args])

    def run(
        self,
        args: list[str],
        cwd: Path | str,
        timeout: float | None = None,
    ) -> ExecResult:
        """
        Execute the binary with args and wait for it to exit.

        Args:
            args: Arguments passed after the binary name
            cwd: Working directory for execution
            timeout: Max execution time in seconds (runner default if None)

        Returns:
            ExecResult with stdout, stderr, exit_code, timed_out

        Raises:
            ExecutionError: If the process cannot be started or waited on
        """
        limit = self.timeout if timeout is None else timeout
        command = self.describe(args)
        start = time.monotonic()

        try:
            proc = subprocess.Popen(
                [self.binary, *args],
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            raise ExecutionError(f"Failed to start '{command}' in {cwd}: {e}") from e

        logger.debug(f"Running: {command} (cwd={cwd}, pid={proc.pid})")

        timed_out = False
        try:
            stdout, stderr = proc.communicate(timeout=limit)
        except subprocess.TimeoutExpired:
            timed_out = True
            logger.warning(f"Command timed out after {limit}s, killing pid {proc.pid}: {command}")
            proc.kill()
            try:
                stdout, stderr = proc.communicate()
            except OSError as e:
                raise ExecutionError(f"Failed to reap '{command}': {e}") from e
        except OSError as e:
            proc.kill()
            proc.wait()
            raise ExecutionError(f"Failed to wait on '{command}': {e}") from e

        return ExecResult(
            stdout=stdout or "",
            stderr=stderr or "",
            exit_code=proc.returncode,
            timed_out=timed_out,
            duration_ms=(time.monotonic() - start) * 1000,
        )
