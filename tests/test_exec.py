"""Unit tests for the command runner."""

from pathlib import Path
import sys

import pytest

from git_status_mcp.errors import ExecutionError, ExternalToolError
from git_status_mcp.tools.exec import CommandRunner, ExecResult


@pytest.fixture
def python_runner() -> CommandRunner:
    return CommandRunner(binary=sys.executable, timeout=10)


def test_success_captures_stdout(python_runner, tmp_path):
    result = python_runner.run(["-c", "print(42)"], tmp_path)

    assert result.success
    assert result.exit_code == 0
    assert result.stdout.strip() == "42"
    assert not result.timed_out
    assert result.duration_ms >= 0


def test_runs_in_working_directory(python_runner, tmp_path):
    work = tmp_path / "work"
    work.mkdir()

    result = python_runner.run(["-c", "import os; print(os.getcwd())"], work)

    assert Path(result.stdout.strip()).resolve() == work.resolve()


def test_nonzero_exit_is_reported_not_raised(python_runner, tmp_path):
    code = "import sys; sys.stderr.write('fatal: boom'); sys.exit(3)"

    result = python_runner.run(["-c", code], tmp_path)

    assert not result.success
    assert result.exit_code == 3
    assert "fatal: boom" in result.stderr


def test_empty_successful_output(python_runner, tmp_path):
    result = python_runner.run(["-c", "pass"], tmp_path)

    assert result.success
    assert result.stdout == ""


def test_stdin_is_detached(python_runner, tmp_path):
    result = python_runner.run(["-c", "import sys; print(repr(sys.stdin.read()))"], tmp_path)

    assert result.stdout.strip() == "''"


def test_timeout_kills_process(python_runner, tmp_path):
    result = python_runner.run(["-c", "import time; time.sleep(30)"], tmp_path, timeout=0.5)

    assert result.timed_out
    assert not result.success
    assert result.exit_code != 0
    assert result.duration_ms < 20_000


def test_runner_default_timeout(tmp_path):
    runner = CommandRunner(binary=sys.executable, timeout=0.5)

    result = runner.run(["-c", "import time; time.sleep(30)"], tmp_path)

    assert result.timed_out


def test_missing_binary_raises_execution_error(tmp_path):
    runner = CommandRunner(binary="definitely-not-a-real-binary-7f3a")

    with pytest.raises(ExecutionError) as exc_info:
        runner.run(["status"], tmp_path)

    assert exc_info.value.code == "EXECUTOR_STARTUP_FAILURE"
    # Startup failures are handled like any other external failure.
    assert isinstance(exc_info.value, ExternalToolError)


def test_missing_working_directory_raises_execution_error(python_runner, tmp_path):
    with pytest.raises(ExecutionError):
        python_runner.run(["-c", "pass"], tmp_path / "does-not-exist")


def test_describe_quotes_arguments():
    runner = CommandRunner()

    assert runner.describe(["status", "--porcelain=v1"]) == "git status --porcelain=v1"
    assert runner.describe(["log", "-n", "a b"]) == "git log -n 'a b'"


def test_exec_result_success_requires_no_timeout():
    assert ExecResult(stdout="", stderr="", exit_code=0).success
    assert not ExecResult(stdout="", stderr="", exit_code=0, timed_out=True).success
    assert not ExecResult(stdout="", stderr="", exit_code=1).success
