"""Subscription MCP tools."""

import logging
from datetime import datetime

from mcp.types import TextContent

from multi_stripe_mcp.defaults import DEFAULT_LIMIT, DEFAULT_MAX_RESULTS
from multi_stripe_mcp.operations import OperationKind
from multi_stripe_mcp.tools._app import mcp
from multi_stripe_mcp.tools._error_handler import handle_tool_errors
from multi_stripe_mcp.tools._service import run_operation, validate_limit

logger = logging.getLogger(__name__)


@mcp.tool(output_schema=None)
@handle_tool_errors
async def list_subscriptions(
    account: str | None = None,
    customer_id: str | None = None,
    status: str | None = None,
    price: str | None = None,
    created_after: datetime | None = None,
    limit: int = DEFAULT_MAX_RESULTS,
    starting_after: str | None = None,
    ending_before: str | None = None,
    fetch_all: bool = False,
) -> list[TextContent]:
    """List Stripe subscriptions, optionally for one customer, status or price.

    Returns at most 100 subscriptions per account unless fetch_all is set.

    Args:
        account: Account name, or "all" to list every account.
        customer_id: Stripe customer ID (cus_...).
        status: Subscription status, e.g. "active", "past_due", "canceled".
        price: Stripe price ID (price_...).
        created_after: Only subscriptions created at or after this time (ISO 8601).
        limit: Maximum number of subscriptions per account (1-100, default: 100).
        starting_after: Subscription ID to continue after (the next_page of a previous call).
        ending_before: Subscription ID to list the page before.
        fetch_all: Fetch every page instead of stopping at the limit (default: False).
    """
    validate_limit(limit)

    logger.info(
        "Listing subscriptions for customer %s (account=%s)",
        customer_id or "any",
        account or "not specified",
    )
    return await run_operation(
        OperationKind.LIST_SUBSCRIPTIONS,
        {
            "account": account,
            "customer_id": customer_id,
            "status": status,
            "price": price,
            "created_after": created_after,
            "limit": limit,
            "starting_after": starting_after,
            "ending_before": ending_before,
            "fetch_all": fetch_all,
        },
    )


@mcp.tool(output_schema=None)
@handle_tool_errors
async def search_subscriptions(
    account: str | None = None,
    status: str | None = None,
    created_after: datetime | None = None,
    limit: int = DEFAULT_LIMIT,
    page: str | None = None,
    fetch_all: bool = False,
) -> list[TextContent]:
    """Search Stripe subscriptions by status or creation date.

    At least one filter is required; use list_subscriptions otherwise.

    Args:
        account: Account name, or "all" to search every account.
        status: Subscription status, e.g. "active".
        created_after: Only subscriptions created at or after this time (ISO 8601).
        limit: Maximum number of subscriptions per account (1-100, default: 10).
        page: Search page token to continue from (the next_page of a previous call).
        fetch_all: Fetch every page instead of stopping at the limit (default: False).
    """
    validate_limit(limit)

    logger.info("Searching subscriptions (account=%s)", account or "not specified")
    return await run_operation(
        OperationKind.SEARCH_SUBSCRIPTIONS,
        {
            "account": account,
            "status": status,
            "created_after": created_after,
            "limit": limit,
            "page": page,
            "fetch_all": fetch_all,
        },
    )
