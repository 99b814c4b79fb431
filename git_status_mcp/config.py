"""MCP configuration loader - reads from git-mcp.toml with ENV overrides."""  # noqa: I001

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import Any, cast

DEFAULT_CONFIG_NAME = "git-mcp.toml"


@dataclass
class McpServerConfig:
    """Server transport settings."""

    transport: str = "stdio"
    log_level: str = "info"

    def validate(self) -> None:
        if self.transport != "stdio":
            raise ValueError(f"Invalid transport: {self.transport}")
        if self.log_level.lower() not in ("debug", "info", "warning", "error"):
            raise ValueError(f"Invalid log_level: {self.log_level}")


@dataclass
class McpToolsConfig:
    """External binary settings."""

    git_binary: str = "git"
    exec_timeout: float = 30.0

    def validate(self) -> None:
        if not self.git_binary or not self.git_binary.strip():
            raise ValueError("git_binary must not be empty")
        if self.exec_timeout <= 0:
            raise ValueError("exec_timeout must be positive")


@dataclass
class McpObservabilityConfig:
    """Logging settings."""

    log_format: str = "text"  # "json" | "text"
    include_correlation_id: bool = True

    def validate(self) -> None:
        if self.log_format not in ("json", "text"):
            raise ValueError(f"Invalid log_format: {self.log_format}")


@dataclass
class McpConfig:
    """Root MCP configuration."""

    enabled: bool = True
    config_version: str = "v1"
    server: McpServerConfig = field(default_factory=McpServerConfig)
    tools: McpToolsConfig = field(default_factory=McpToolsConfig)
    observability: McpObservabilityConfig = field(default_factory=McpObservabilityConfig)

    def validate(self) -> None:
        self.server.validate()
        self.tools.validate()
        self.observability.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "enabled": self.enabled,
            "config_version": self.config_version,
            "server": {"transport": self.server.transport, "log_level": self.server.log_level},
            "tools": {
                "git_binary": self.tools.git_binary,
                "exec_timeout": self.tools.exec_timeout,
            },
            "observability": {
                "log_format": self.observability.log_format,
                "include_correlation_id": self.observability.include_correlation_id,
            },
        }


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def _apply_env_overrides(cfg: McpConfig) -> McpConfig:
    """Apply environment variable overrides. ENV beats TOML."""
    if os.getenv("GIT_MCP_ENABLED"):
        cfg.enabled = _env_flag("GIT_MCP_ENABLED")

    if os.getenv("GIT_MCP_LOG_LEVEL"):
        cfg.server.log_level = os.getenv("GIT_MCP_LOG_LEVEL", cfg.server.log_level)

    if os.getenv("GIT_MCP_GIT_BINARY"):
        cfg.tools.git_binary = os.getenv("GIT_MCP_GIT_BINARY", cfg.tools.git_binary)

    if os.getenv("GIT_MCP_EXEC_TIMEOUT"):
        raw = os.getenv("GIT_MCP_EXEC_TIMEOUT", "")
        try:
            cfg.tools.exec_timeout = float(raw)
        except ValueError:
            raise ValueError(f"GIT_MCP_EXEC_TIMEOUT must be a number, got {raw!r}") from None

    if os.getenv("GIT_MCP_LOG_FORMAT"):
        cfg.observability.log_format = os.getenv(
            "GIT_MCP_LOG_FORMAT", cfg.observability.log_format
        )

    return cfg


def load_config(config_path: str | Path | None = None) -> McpConfig:
    """
    Load MCP config from git-mcp.toml with ENV overrides.

    Precedence: ENV → TOML → defaults

    Args:
        config_path: Path to the TOML file. If None, searches:
            1. GIT_MCP_CONFIG env var
            2. ./git-mcp.toml

    Returns:
        McpConfig dataclass with merged settings.

    Raises:
        ValueError: If the merged config is invalid.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        if os.getenv("GIT_MCP_CONFIG"):
            config_path = Path(cast(str, os.getenv("GIT_MCP_CONFIG")))
        else:
            config_path = Path(DEFAULT_CONFIG_NAME)
    else:
        config_path = Path(config_path)

    cfg = McpConfig()

    if config_path.exists():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        mcp_data = data.get("mcp", {})

        cfg.enabled = mcp_data.get("enabled", cfg.enabled)
        cfg.config_version = mcp_data.get("config_version", cfg.config_version)

        srv = mcp_data.get("server", {})
        cfg.server.transport = srv.get("transport", cfg.server.transport)
        cfg.server.log_level = srv.get("log_level", cfg.server.log_level)

        tools = mcp_data.get("tools", {})
        cfg.tools.git_binary = tools.get("git_binary", cfg.tools.git_binary)
        cfg.tools.exec_timeout = float(tools.get("exec_timeout", cfg.tools.exec_timeout))

        obs = mcp_data.get("observability", {})
        cfg.observability.log_format = obs.get("log_format", cfg.observability.log_format)
        cfg.observability.include_correlation_id = obs.get(
            "include_correlation_id", cfg.observability.include_correlation_id
        )

    cfg = _apply_env_overrides(cfg)

    cfg.validate()

    return cfg
