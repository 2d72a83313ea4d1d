"""Diagnostic logging setup."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Send package logs to stderr at the requested level.

    Standard output is reserved for protocol messages when the server runs on
    the stdio transport, so nothing here may write to it.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    resolved = getattr(logging, level.upper(), logging.WARNING)
    for name in ("echo_mcp", "echo_mcp_server"):
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.setLevel(resolved)
        logger.propagate = False
