#!/usr/bin/env python3
"""
Git Status MCP Server - Model Context Protocol interface for read-only git queries.

Supports stdio transport for MCP clients.
Run with: python -m git_status_mcp

Tools:
- git-status: working tree status, current branch and remotes
- git-log: recent commits in one-line form
"""  # noqa: I001

from __future__ import annotations

import asyncio
import logging
import sys
import tomllib

from git_status_mcp import __version__
from git_status_mcp.config import McpConfig, load_config
from git_status_mcp.dispatcher import Dispatcher
from git_status_mcp.errors import UnknownToolError
from git_status_mcp.observability import setup_logging
from git_status_mcp.registry import build_registry
from git_status_mcp.tools.exec import CommandRunner
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

SERVER_NAME = "git-status-server"
READY_MESSAGE = "Git Status MCP Server started and listening on stdio"

# Configure logging to stderr (stdout is the protocol channel)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("git-mcp")


class GitMcpServer:
    """Git MCP Server implementation."""

    def __init__(self, config: McpConfig):
        self.config = config
        self.server = Server(SERVER_NAME, version=__version__)

        # Registry is complete and frozen before any handler is wired.
        self.registry = build_registry()
        self.runner = CommandRunner(
            binary=config.tools.git_binary,
            timeout=config.tools.exec_timeout,
        )
        self.dispatcher = Dispatcher(self.registry, self.runner)

        self._register_handlers()
        logger.info(
            f"Git MCP Server initialized ({config.config_version}, "
            f"{len(self.registry)} tools: {', '.join(self.registry.names())})"
        )

    def _current_request_id(self) -> str | int | None:
        try:
            return self.server.request_context.request_id
        except LookupError:
            return None

    def _register_handlers(self):
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            """Return available tools."""
            return [d.to_tool() for d in self.dispatcher.handle_list_tools()]

        async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
            """Dispatch a tool call; unknown tools become a JSON-RPC error."""
            try:
                envelope = self.dispatcher.handle_call_tool(
                    req.params.name,
                    req.params.arguments,
                    request_id=self._current_request_id(),
                )
            except UnknownToolError as e:
                logger.warning(str(e))
                raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(e))) from e
            return types.ServerResult(envelope.to_result())

        # Registered directly: the SDK's call_tool decorator turns every
        # exception into an isError result, including unknown tools.
        self.server.request_handlers[types.CallToolRequest] = call_tool

    async def run(self):
        """Run the server with stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info(READY_MESSAGE)
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def main():
    """Entry point for the git MCP server."""
    import argparse

    parser = argparse.ArgumentParser(description="Git Status MCP Server")
    parser.add_argument(
        "--config",
        "-c",
        help="Path to git-mcp.toml config file",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        "-l",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Override log level",
    )
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (OSError, ValueError, tomllib.TOMLDecodeError) as e:
        logger.error(f"Failed to load config: {e}")
        sys.exit(1)

    if args.log_level:
        config.server.log_level = args.log_level

    serve(config)


def serve(config: McpConfig) -> None:
    """Set up logging and run the stdio server until the client disconnects."""
    global logger  # noqa: PLW0603
    logger = setup_logging(config.observability, config.server.log_level)

    logger.info(f"Config loaded: enabled={config.enabled}, version={config.config_version}")
    logger.info(
        f"Tools: git_binary={config.tools.git_binary}, exec_timeout={config.tools.exec_timeout}s"
    )

    if not config.enabled:
        logger.warning("MCP server disabled in config, exiting")
        sys.exit(0)

    try:
        server = GitMcpServer(config)
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Fatal server error")
        sys.exit(1)


if __name__ == "__main__":
    main()
