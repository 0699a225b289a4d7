"""MCP server entry point for multi-stripe-mcp."""

import logging
import sys

import structlog

from multi_stripe_mcp.config import get_settings
from multi_stripe_mcp.exceptions import ConfigError
from multi_stripe_mcp.tools import mcp

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send stdlib logging and structlog output to stderr.

    stdout carries the stdio transport, so nothing may be logged there.
    """
    numeric_level = logging.getLevelName(level)
    logging.basicConfig(
        level=numeric_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def main() -> None:
    """Entry point for the MCP server."""
    try:
        settings = get_settings()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    logger.info("Starting multi-stripe-mcp (api_version=%s)", settings.api_version)
    mcp.run()


if __name__ == "__main__":
    main()
