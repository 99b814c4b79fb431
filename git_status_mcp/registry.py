"""Tool registry: ordered, write-once mapping from tool name to handler."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, fields
from typing import Any

from mcp.types import Tool

from git_status_mcp.errors import UnknownToolError
from git_status_mcp.schema import ArgSpec, build_input_schema, normalize_arguments
from git_status_mcp.tools.exec import CommandRunner

Handler = Callable[[Any, CommandRunner], str]


@dataclass(frozen=True)
class ToolDescriptor:
    """Discovery metadata for one tool."""

    name: str
    description: str
    params: tuple[ArgSpec, ...]
    args_type: type

    def __post_init__(self) -> None:
        declared = [p.name for p in self.params]
        record = [f.name for f in fields(self.args_type)]
        if declared != record:
            raise ValueError(
                f"Tool '{self.name}' params {declared} do not match {self.args_type.__name__} fields {record}"
            )

    @property
    def input_schema(self) -> dict[str, Any]:
        return build_input_schema(self.params)

    def parse_arguments(self, arguments: Any) -> Any:
        """Normalize raw arguments into the tool's typed argument record."""
        return self.args_type(**normalize_arguments(self.params, arguments))

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: ToolDescriptor
    handler: Handler


class ToolRegistry:
    """Ordered tool registry.

    Populated once at startup, then frozen. Lookups are exact-match and
    case-sensitive. Reads need no locking once frozen.
    """

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, descriptor: ToolDescriptor, handler: Handler) -> None:
        if self._frozen:
            raise RuntimeError(f"Registry is frozen; cannot register '{descriptor.name}'")
        if descriptor.name in self._tools:
            raise ValueError(f"Tool already registered: {descriptor.name}")
        self._tools[descriptor.name] = RegisteredTool(descriptor, handler)

    def freeze(self) -> None:
        self._frozen = True

    def list_tools(self) -> list[ToolDescriptor]:
        return [entry.descriptor for entry in self._tools.values()]

    def resolve(self, name: str) -> RegisteredTool:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self.list_tools())


def build_registry() -> ToolRegistry:
    """Register the git tools and freeze the registry."""
    from git_status_mcp.tools.git import GIT_LOG, GIT_STATUS, git_log, git_status

    registry = ToolRegistry()
    registry.register(GIT_STATUS, git_status)
    registry.register(GIT_LOG, git_log)
    registry.freeze()
    return registry
