"""Customer MCP tools."""

import logging
from datetime import datetime

from mcp.types import TextContent
from pydantic import EmailStr

from multi_stripe_mcp.defaults import DEFAULT_LIMIT
from multi_stripe_mcp.operations import OperationKind
from multi_stripe_mcp.tools._app import mcp
from multi_stripe_mcp.tools._error_handler import handle_tool_errors
from multi_stripe_mcp.tools._service import require_value, run_operation, validate_limit

logger = logging.getLogger(__name__)


@mcp.tool(output_schema=None)
@handle_tool_errors
async def search_customer(
    name: str,
    account: str | None = None,
    limit: int = DEFAULT_LIMIT,
    page: str | None = None,
    fetch_all: bool = False,
) -> list[TextContent]:
    """Search Stripe customers by name (partial match).

    Args:
        name: Text contained in the customer name.
        account: Account name (e.g., "1st_account"), or "all" to search every account.
        limit: Maximum number of customers per account (1-100, default: 10).
        page: Search page token to continue from (the next_page of a previous call).
        fetch_all: Fetch every page instead of stopping at the limit (default: False).
    """
    require_value("name", name)
    validate_limit(limit)

    logger.info("Searching customers by name (account=%s)", account or "not specified")
    return await run_operation(
        OperationKind.SEARCH_CUSTOMERS_BY_NAME,
        {
            "name": name,
            "account": account,
            "limit": limit,
            "page": page,
            "fetch_all": fetch_all,
        },
    )


@mcp.tool(output_schema=None)
@handle_tool_errors
async def search_customer_by_email(
    email: EmailStr,
    account: str | None = None,
    limit: int = DEFAULT_LIMIT,
    starting_after: str | None = None,
    page: str | None = None,
    fetch_all: bool = False,
) -> list[TextContent]:
    """Find Stripe customers by email address.

    Exact matches are returned when they exist; otherwise customers whose email
    contains the address are searched. The result message names the argument
    to continue with: starting_after for exact matches, page for the search.

    Args:
        email: Customer email address.
        account: Account name, or "all" to search every account.
        limit: Maximum number of customers per account (1-100, default: 10).
        starting_after: Customer ID to continue the exact matches after.
        page: Search page token to continue the partial-match search from.
        fetch_all: Fetch every page instead of stopping at the limit (default: False).
    """
    validate_limit(limit)

    logger.info("Searching customers by email (account=%s)", account or "not specified")
    return await run_operation(
        OperationKind.SEARCH_CUSTOMERS_BY_EMAIL,
        {
            "email": str(email),
            "account": account,
            "limit": limit,
            "starting_after": starting_after,
            "page": page,
            "fetch_all": fetch_all,
        },
    )


@mcp.tool(output_schema=None)
@handle_tool_errors
async def list_customers(
    account: str | None = None,
    email: str | None = None,
    created_after: datetime | None = None,
    limit: int = DEFAULT_LIMIT,
    starting_after: str | None = None,
    ending_before: str | None = None,
    fetch_all: bool = False,
) -> list[TextContent]:
    """List Stripe customers, newest first.

    Use this instead of search_customer when there is nothing to search for.

    Args:
        account: Account name, or "all" to list every account.
        email: Only customers with exactly this email address.
        created_after: Only customers created at or after this time (ISO 8601).
        limit: Maximum number of customers per account (1-100, default: 10).
        starting_after: Customer ID to continue after (the next_page of a previous call).
        ending_before: Customer ID to list the page before.
        fetch_all: Fetch every page instead of stopping at the limit (default: False).
    """
    validate_limit(limit)

    logger.info("Listing customers (account=%s)", account or "not specified")
    return await run_operation(
        OperationKind.LIST_CUSTOMERS,
        {
            "account": account,
            "email": email,
            "created_after": created_after,
            "limit": limit,
            "starting_after": starting_after,
            "ending_before": ending_before,
            "fetch_all": fetch_all,
        },
    )
