"""List accounts MCP tool."""

from multi_stripe_mcp.tools._app import mcp
from multi_stripe_mcp.tools._service import list_configured_accounts


@mcp.tool
def list_accounts() -> str:
    """List all registered Stripe account names.

    Use this to discover which accounts are available before calling other
    tools. Pass one of these names, or "all", as the account argument.

    Returns:
        A newline-separated list of account names.
    """
    accounts = list_configured_accounts()
    if not accounts:
        return "No Stripe accounts registered."
    return "\n".join(f"- {account}" for account in accounts)
