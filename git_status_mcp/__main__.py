"""Allow `python -m git_status_mcp` to start the stdio server."""

from git_status_mcp.server import main

if __name__ == "__main__":
    main()
