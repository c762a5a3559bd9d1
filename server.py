"""FastMCP entry point for the checklist reviewer."""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from checklist_reviewer.config import (
    SERVER_HOST,
    SERVER_NAME,
    SERVER_PORT,
    SERVER_VERSION,
    JudgeSettings,
)
from checklist_reviewer.mcp_tools import register_tools

# ── Logging ──────────────────────────────────────────────────────────────────
# Configure logging for all checklist_reviewer.* modules so judge calls,
# token usage, and errors show up in the server's stderr output.

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
    datefmt="%H:%M:%S",
)
# Keep HTTP client noise at WARNING
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_server(settings: JudgeSettings | None = None) -> FastMCP:
    """Create and configure the FastMCP server instance.

    Judge settings are read from the environment once, here, unless given.
    """
    mcp = FastMCP(
        name=SERVER_NAME,
        version=SERVER_VERSION,
    )
    register_tools(mcp, settings or JudgeSettings.from_env())
    return mcp


# Module-level server instance (used by FastMCP CLI and stdio transport)
mcp = create_server()


def main() -> None:
    """Entry point, runs as streamable HTTP MCP server."""
    logging.getLogger(__name__).info(
        "Starting %s v%s on %s:%d",
        SERVER_NAME,
        SERVER_VERSION,
        SERVER_HOST,
        SERVER_PORT,
    )
    try:
        mcp.run(
            transport="streamable-http",
            host=SERVER_HOST,
            port=SERVER_PORT,
        )
    except OSError as e:
        logging.getLogger(__name__).error("Server failed to start: %s", e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
