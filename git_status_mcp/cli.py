"""CLI for the git MCP server."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table
import typer

app = typer.Typer(
    name="git-status-mcp",
    help="Git Status MCP Server CLI",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _parse_pairs(pairs: list[str]) -> dict[str, str]:
    arguments: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}", param_hint="--arg")
        arguments[key.strip()] = value
    return arguments


@app.command()
def serve(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to git-mcp.toml"),
    log_level: str = typer.Option(None, "--log-level", "-l", help="Override log level"),
) -> None:
    """Run the MCP server on stdio."""
    from git_status_mcp.config import load_config
    from git_status_mcp.server import serve as run_server

    config = load_config(config_path)
    if log_level:
        config.server.log_level = log_level
        config.validate()
    run_server(config)


@app.command()
def tools(
    as_json: bool = typer.Option(False, "--json", help="Print raw tool descriptors"),
) -> None:
    """List registered tools."""
    from git_status_mcp.registry import build_registry

    registry = build_registry()

    if as_json:
        console.print_json(json.dumps([d.to_dict() for d in registry.list_tools()]))
        return

    table = Table(title="Registered tools")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Description")
    table.add_column("Arguments")
    for descriptor in registry.list_tools():
        args = ", ".join(
            f"{p.name}: {p.type}" + (f" = {p.default}" if p.default is not None else "")
            for p in descriptor.params
        )
        table.add_row(descriptor.name, descriptor.description, args or "-")
    console.print(table)


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name, e.g. git-status"),
    arg: list[str] = typer.Option(None, "--arg", "-a", help="Tool argument as key=value"),
    as_json: bool = typer.Option(False, "--json", help="Print the response envelope as JSON"),
    config_path: str = typer.Option(None, "--config", "-c", help="Path to git-mcp.toml"),
) -> None:
    """Invoke a tool locally and print its response."""
    from git_status_mcp.config import load_config
    from git_status_mcp.dispatcher import Dispatcher
    from git_status_mcp.errors import UnknownToolError
    from git_status_mcp.registry import build_registry
    from git_status_mcp.tools.exec import CommandRunner

    config = load_config(config_path)
    runner = CommandRunner(binary=config.tools.git_binary, timeout=config.tools.exec_timeout)
    dispatcher = Dispatcher(build_registry(), runner)

    try:
        envelope = dispatcher.handle_call_tool(name, _parse_pairs(arg or []))
    except UnknownToolError as e:
        err_console.print(f"[red]✗[/] {e}")
        raise typer.Exit(1) from None

    if as_json:
        console.print_json(json.dumps(envelope.to_result().model_dump(mode="json")))
    else:
        console.print(envelope.text, markup=False, highlight=False, soft_wrap=True)

    if envelope.is_error:
        raise typer.Exit(1)


@app.command(name="config")
def show_config(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to git-mcp.toml"),
) -> None:
    """Show the effective configuration."""
    from git_status_mcp.config import load_config

    config = load_config(config_path)
    console.print_json(json.dumps(config.to_dict()))


def main() -> None:
    """Entry point for git-status-mcp CLI."""
    app()


if __name__ == "__main__":
    main()
