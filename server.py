"""FastMCP entry point for the pull request checks.

Usage:
  python server.py                      # streamable HTTP on SERVER_HOST:SERVER_PORT
  python server.py --transport stdio    # for MCP clients that spawn the server
"""

from __future__ import annotations

import argparse
import logging

from fastmcp import FastMCP

from prchecks.config import SERVER_HOST, SERVER_NAME, SERVER_PORT, SERVER_VERSION
from prchecks.mcp_tools import register_tools

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Send prchecks.* logs to stderr; keep the GitHub client quiet."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("github").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_server() -> FastMCP:
    """Create the FastMCP server with the check tools registered."""
    server = FastMCP(name=SERVER_NAME, version=SERVER_VERSION)
    register_tools(server)
    return server


# Module-level instance for `fastmcp run server.py`
mcp = create_server()


def main() -> None:
    parser = argparse.ArgumentParser(description=f"{SERVER_NAME} MCP server")
    parser.add_argument(
        "--transport", choices=("streamable-http", "stdio"), default="streamable-http"
    )
    parser.add_argument("--host", default=SERVER_HOST)
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    args = parser.parse_args()

    configure_logging()
    if args.transport == "stdio":
        logger.info("Starting %s v%s on stdio", SERVER_NAME, SERVER_VERSION)
        mcp.run(transport="stdio")
        return

    logger.info(
        "Starting %s v%s on %s:%d", SERVER_NAME, SERVER_VERSION, args.host, args.port
    )
    try:
        mcp.run(transport="streamable-http", host=args.host, port=args.port)
    except OSError as e:
        logger.error("Server failed to start: %s", e)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
