"""git-status-mcp - MCP server exposing read-only git tools over stdio."""

__version__ = "1.0.0"
