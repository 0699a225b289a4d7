"""Invoice operations."""

from typing import Any

import stripe

from multi_stripe_mcp.exceptions import InvalidQueryError
from multi_stripe_mcp.operations.base import OperationKind, OperationResult
from multi_stripe_mcp.operations.registry import register_operation
from multi_stripe_mcp.pagination import describe_page, paginate_list, paginate_search
from multi_stripe_mcp.query import (
    InvoiceListFilters,
    InvoiceSearchFilters,
    build_invoice_list,
    build_invoice_search,
)


@register_operation(OperationKind.SEARCH_INVOICES)
async def search(client: stripe.StripeClient, options: dict[str, Any]) -> OperationResult:
    """Search invoices; at least one filter is required."""
    filters = InvoiceSearchFilters.model_validate(options)
    try:
        request = build_invoice_search(filters)
    except InvalidQueryError as e:
        return OperationResult.failure(str(e))

    page = await paginate_search(
        client.invoices.search_async,
        request.to_params(),
        limit=filters.limit,
        fetch_all=filters.fetch_all,
        page_size=filters.page_size,
        max_results=filters.max_results,
    )
    return OperationResult(
        success=True,
        data=page.items,
        has_more=page.has_more,
        next_page=page.next_cursor,
        message=describe_page("invoices", page, cursor_param="page"),
    )


@register_operation(OperationKind.LIST_INVOICES)
async def list_invoices(client: stripe.StripeClient, options: dict[str, Any]) -> OperationResult:
    filters = InvoiceListFilters.model_validate(options)
    request = build_invoice_list(filters)
    page = await paginate_list(
        client.invoices.list_async,
        request.to_params(),
        limit=filters.limit,
        fetch_all=filters.fetch_all,
        page_size=filters.page_size,
        max_results=filters.max_results,
    )
    return OperationResult(
        success=True,
        data=page.items,
        has_more=page.has_more,
        next_page=page.next_cursor,
        message=describe_page("invoices", page, cursor_param="starting_after"),
    )


@register_operation(OperationKind.GET_INVOICE)
async def get_invoice(client: stripe.StripeClient, options: dict[str, Any]) -> OperationResult:
    invoice_id = options.get("invoice_id")
    if not invoice_id:
        return OperationResult.failure("An invoice ID is required.")

    invoice = await client.invoices.retrieve_async(invoice_id)
    return OperationResult(success=True, data=invoice, message=f"Retrieved invoice {invoice_id}.")
