"""MCP tools registered on the shared FastMCP app."""

# isort: skip_file

from multi_stripe_mcp.tools._app import mcp

# Import tool modules to trigger registration via decorators
from multi_stripe_mcp.tools import customers as _customers  # noqa: F401
from multi_stripe_mcp.tools import invoices as _invoices  # noqa: F401
from multi_stripe_mcp.tools import list_accounts as _list_accounts  # noqa: F401
from multi_stripe_mcp.tools import subscriptions as _subscriptions  # noqa: F401

__all__ = ["mcp"]
