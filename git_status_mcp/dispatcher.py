"""
Request dispatcher for the git MCP server.

Two entry points, no state between calls:
- handle_list_tools: discovery, always succeeds
- handle_call_tool: resolve, normalize arguments, run handler, build envelope

UnknownToolError is the only failure that escapes handle_call_tool. Argument
problems, git failures and unexpected handler faults all come back as an
envelope with is_error=True.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Any

from mcp.types import CallToolResult, TextContent

from git_status_mcp.errors import ExternalToolError, InvalidArgumentError
from git_status_mcp.observability import generate_correlation_id
from git_status_mcp.registry import ToolDescriptor, ToolRegistry
from git_status_mcp.tools.exec import CommandRunner

logger = logging.getLogger("git-mcp.dispatch")

GUIDANCE_TEXT = (
    "Please ensure:\n"
    "1. You are in a git repository\n"
    "2. Git is installed and available in PATH\n"
    "3. You have proper permissions to access the directory"
)


@dataclass
class ResponseEnvelope:
    """Uniform tool response: one text block plus an error flag."""

    request_id: str | int | None
    content: list[TextContent] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text_response(
        cls, request_id: str | int | None, text: str, is_error: bool = False
    ) -> ResponseEnvelope:
        return cls(
            request_id=request_id,
            content=[TextContent(type="text", text=text)],
            is_error=is_error,
        )

    @property
    def text(self) -> str:
        return "".join(block.text for block in self.content)

    def to_result(self) -> CallToolResult:
        return CallToolResult(content=list(self.content), isError=self.is_error)


def _command_name(tool_name: str) -> str:
    """git-status -> 'git status' for human-readable messages."""
    return tool_name.replace("-", " ")


class Dispatcher:
    """Routes tool calls to registry handlers and wraps their outcome."""

    def __init__(self, registry: ToolRegistry, runner: CommandRunner):
        self.registry = registry
        self.runner = runner

    def handle_list_tools(self) -> list[ToolDescriptor]:
        logger.debug("list_tools called")
        return self.registry.list_tools()

    def handle_call_tool(
        self,
        name: str,
        arguments: Any = None,
        request_id: str | int | None = None,
    ) -> ResponseEnvelope:
        """
        Invoke a registered tool.

        Raises:
            UnknownToolError: If no tool with this exact name is registered.
        """
        cid = str(request_id) if request_id is not None else generate_correlation_id()
        log_extra: dict[str, Any] = {"correlation_id": cid, "tool": name}

        # Raises before anything is parsed or spawned.
        entry = self.registry.resolve(name)

        logger.info(f"call_tool: {name}", extra=log_extra)
        start_time = time.time()
        error_msg = None

        try:
            parsed = entry.descriptor.parse_arguments(arguments)
            text = entry.handler(parsed, self.runner)
            envelope = ResponseEnvelope.text_response(request_id, text)
        except InvalidArgumentError as e:
            error_msg = str(e)
            envelope = ResponseEnvelope.text_response(request_id, error_msg, is_error=True)
        except ExternalToolError as e:
            error_msg = str(e)
            envelope = ResponseEnvelope.text_response(
                request_id,
                f"Error running {_command_name(name)}: {e}\n\n{GUIDANCE_TEXT}",
                is_error=True,
            )
        except Exception as e:
            error_msg = str(e)
            logger.exception(f"Tool {name} failed: {e}", extra=log_extra)
            envelope = ResponseEnvelope.text_response(
                request_id,
                f"Internal error running {_command_name(name)}: {e}",
                is_error=True,
            )

        latency_ms = (time.time() - start_time) * 1000
        logger.info(
            f"call_tool done: {name}",
            extra={
                **log_extra,
                "latency_ms": round(latency_ms, 2),
                "status": "error" if envelope.is_error else "ok",
                "error": error_msg,
            },
        )
        return envelope
