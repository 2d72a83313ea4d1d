"""Entry point for the echo MCP server."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from echo_mcp_server.config import ServerSettings, get_settings
from echo_mcp_server.fastmcp_adapter import build_fastmcp_app
from echo_mcp_server.logging_config import configure_logging
from echo_mcp_server.tools import build_server

logger = logging.getLogger(__name__)

TRANSPORTS = ("stdio", "http", "sse", "streamable-http")


def build_parser(settings: ServerSettings) -> argparse.ArgumentParser:
    """Create the argument parser, defaulting to the loaded settings."""
    parser = argparse.ArgumentParser(description="Echo MCP utility server")
    parser.add_argument(
        "--catalog", action="store_true", help="Print the tool catalog as JSON"
    )
    parser.add_argument(
        "--call", metavar="TOOL", help="Invoke a single tool and print its envelope"
    )
    parser.add_argument(
        "--arguments",
        default="{}",
        help="JSON object of arguments for --call",
    )
    parser.add_argument("--transport", choices=TRANSPORTS, default=settings.transport)
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument("--path", default=settings.path)
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Print the catalog, run one call, or serve over the chosen transport."""
    settings = get_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.catalog:
        print(json.dumps(build_server().to_catalog(), indent=2))
        return 0

    if args.call:
        try:
            arguments = json.loads(args.arguments)
        except json.JSONDecodeError as error:
            parser.error(f"--arguments is not valid JSON: {error}")
        result = build_server().handle(args.call, arguments)
        print(result.to_json())
        return 1 if result.is_error else 0

    app, _ = build_fastmcp_app()
    run_kwargs: dict[str, Any] = {"transport": args.transport}
    if args.transport != "stdio":
        run_kwargs.update(host=args.host, port=args.port, path=args.path)
    logger.info("Starting %s transport", args.transport)
    app.run(**run_kwargs)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
