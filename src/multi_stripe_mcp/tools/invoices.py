"""Invoice MCP tools."""

import logging
from datetime import datetime

from mcp.types import TextContent

from multi_stripe_mcp.defaults import DEFAULT_LIMIT
from multi_stripe_mcp.operations import OperationKind
from multi_stripe_mcp.tools._app import mcp
from multi_stripe_mcp.tools._error_handler import handle_tool_errors
from multi_stripe_mcp.tools._service import require_value, run_operation, validate_limit

logger = logging.getLogger(__name__)


@mcp.tool(output_schema=None)
@handle_tool_errors
async def search_invoices(
    account: str | None = None,
    customer_id: str | None = None,
    status: str | None = None,
    total: int | None = None,
    subscription: str | None = None,
    number: str | None = None,
    created_after: datetime | None = None,
    limit: int = DEFAULT_LIMIT,
    page: str | None = None,
    fetch_all: bool = False,
) -> list[TextContent]:
    """Search Stripe invoices by customer, status, total, subscription, number or date.

    At least one filter is required; use list_invoices to browse without filters.

    Args:
        account: Account name, or "all" to search every account.
        customer_id: Stripe customer ID (cus_...).
        status: Invoice status: "draft", "open", "paid", "uncollectible" or "void".
        total: Exact invoice total in the smallest currency unit (e.g. cents).
        subscription: Stripe subscription ID (sub_...).
        number: Invoice number.
        created_after: Only invoices created at or after this time (ISO 8601).
        limit: Maximum number of invoices per account (1-100, default: 10).
        page: Search page token to continue from (the next_page of a previous call).
        fetch_all: Fetch every page instead of stopping at the limit (default: False).
    """
    validate_limit(limit)

    logger.info("Searching invoices (account=%s)", account or "not specified")
    return await run_operation(
        OperationKind.SEARCH_INVOICES,
        {
            "account": account,
            "customer_id": customer_id,
            "status": status,
            "total": total,
            "subscription": subscription,
            "number": number,
            "created_after": created_after,
            "limit": limit,
            "page": page,
            "fetch_all": fetch_all,
        },
    )


@mcp.tool(output_schema=None)
@handle_tool_errors
async def list_invoices(
    account: str | None = None,
    customer_id: str | None = None,
    status: str | None = None,
    subscription: str | None = None,
    created_after: datetime | None = None,
    limit: int = DEFAULT_LIMIT,
    starting_after: str | None = None,
    ending_before: str | None = None,
    fetch_all: bool = False,
) -> list[TextContent]:
    """List Stripe invoices, newest first.

    Args:
        account: Account name, or "all" to list every account.
        customer_id: Stripe customer ID (cus_...).
        status: Invoice status.
        subscription: Stripe subscription ID (sub_...).
        created_after: Only invoices created at or after this time (ISO 8601).
        limit: Maximum number of invoices per account (1-100, default: 10).
        starting_after: Invoice ID to continue after (the next_page of a previous call).
        ending_before: Invoice ID to list the page before.
        fetch_all: Fetch every page instead of stopping at the limit (default: False).
    """
    validate_limit(limit)

    logger.info(
        "Listing invoices for customer %s (account=%s)",
        customer_id or "any",
        account or "not specified",
    )
    return await run_operation(
        OperationKind.LIST_INVOICES,
        {
            "account": account,
            "customer_id": customer_id,
            "status": status,
            "subscription": subscription,
            "created_after": created_after,
            "limit": limit,
            "starting_after": starting_after,
            "ending_before": ending_before,
            "fetch_all": fetch_all,
        },
    )


@mcp.tool(output_schema=None)
@handle_tool_errors
async def get_invoice(
    invoice_id: str,
    account: str | None = None,
) -> list[TextContent]:
    """Retrieve one Stripe invoice by ID.

    Args:
        invoice_id: Stripe invoice ID (in_...).
        account: Account name, or "all" to look in every account.
    """
    require_value("invoice_id", invoice_id)

    logger.info("Retrieving invoice %s (account=%s)", invoice_id, account or "not specified")
    return await run_operation(
        OperationKind.GET_INVOICE,
        {"invoice_id": invoice_id, "account": account},
    )
