"""Common error handling for MCP tools."""

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

from mcp.types import TextContent

from multi_stripe_mcp.exceptions import (
    AccountNotFoundError,
    ConfigError,
    InvalidQueryError,
    MultiStripeError,
)

logger = logging.getLogger(__name__)

ToolFunc = Callable[..., Awaitable[list[TextContent]]]


def _text(message: str) -> list[TextContent]:
    return [TextContent(type="text", text=message)]


def handle_tool_errors(func: ToolFunc) -> ToolFunc:
    """Wrap an MCP tool coroutine to catch errors raised outside the dispatcher.

    Per-account failures are already outcomes by the time they reach a tool;
    this covers settings and wiring problems.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> list[TextContent]:
        try:
            return await func(*args, **kwargs)
        except ConfigError as e:
            return _text(f"Configuration error: {e}")
        except AccountNotFoundError as e:
            return _text(f"Account not found: {e.account_name}")
        except InvalidQueryError as e:
            return _text(f"Invalid input: {e}")
        except MultiStripeError as e:
            return _text(f"Error: {e}")
        except ValueError as e:
            return _text(f"Invalid input: {e}")
        except Exception:
            logger.exception("Unexpected error in tool %s", func.__name__)
            return _text("An unexpected error occurred. Check the server logs for details.")

    return wrapper
