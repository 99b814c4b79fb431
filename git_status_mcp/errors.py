"""
Error types for the git MCP server.

Two tiers:
- UnknownToolError is a caller bug and surfaces as a protocol-level error.
- Everything else is a data or environment condition and becomes an
  error envelope (isError=True) that the client can act on.
"""

from __future__ import annotations


class GitMcpError(Exception):
    """Base error for dispatcher operations."""

    code: str = "GIT_MCP_ERROR"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class UnknownToolError(GitMcpError):
    """Requested tool name is not registered."""

    code = "UNKNOWN_TOOL"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArgumentError(GitMcpError):
    """Argument failed schema validation."""

    code = "INVALID_ARGUMENT"

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid argument '{field}': {reason}")
        self.field = field
        self.reason = reason


class ExternalToolError(GitMcpError):
    """The external binary exited non-zero, timed out, or reported an error."""

    code = "EXTERNAL_TOOL_FAILURE"


class ExecutionError(ExternalToolError):
    """The external binary could not be started or waited on."""

    code = "EXECUTOR_STARTUP_FAILURE"
