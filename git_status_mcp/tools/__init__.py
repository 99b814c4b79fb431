"""Git MCP tools - command runner and git handlers."""

from git_status_mcp.tools.exec import (  # noqa: F401
    DEFAULT_TIMEOUT,
    CommandRunner,
    ExecResult,
)
