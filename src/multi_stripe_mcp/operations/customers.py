"""Customer operations."""

import logging
from typing import Any

import stripe

from multi_stripe_mcp.exceptions import InvalidQueryError
from multi_stripe_mcp.operations.base import OperationKind, OperationResult
from multi_stripe_mcp.operations.registry import register_operation
from multi_stripe_mcp.pagination import describe_page, paginate_list, paginate_search
from multi_stripe_mcp.query import (
    CustomerListFilters,
    CustomerSearchFilters,
    build_customer_list,
    build_customer_search,
)

logger = logging.getLogger(__name__)


async def _search(client: stripe.StripeClient, filters: CustomerSearchFilters) -> OperationResult:
    try:
        request = build_customer_search(filters)
    except InvalidQueryError as e:
        return OperationResult.failure(str(e))

    page = await paginate_search(
        client.customers.search_async,
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
        message=describe_page("customers", page, cursor_param="page"),
    )


@register_operation(OperationKind.SEARCH_CUSTOMERS_BY_NAME)
async def search_by_name(client: stripe.StripeClient, options: dict[str, Any]) -> OperationResult:
    """Search customers whose name contains the given text."""
    filters = CustomerSearchFilters.model_validate(options)
    if not filters.name:
        return OperationResult.failure("A customer name is required.")
    return await _search(client, filters)


@register_operation(OperationKind.SEARCH_CUSTOMERS_BY_EMAIL)
async def search_by_email(client: stripe.StripeClient, options: dict[str, Any]) -> OperationResult:
    """Look customers up by email.

    Tries the exact-match list filter first and falls back to a substring
    search when nothing matches exactly. A ``page`` token continues the
    substring search; a list cursor continues the exact matches.
    """
    email = options.get("email")
    if not email:
        return OperationResult.failure("An email address is required.")

    search_filters = CustomerSearchFilters.model_validate({**options, "name": None})
    if search_filters.page:
        return await _search(client, search_filters)

    list_filters = CustomerListFilters.model_validate(options)
    request = build_customer_list(list_filters)
    page = await paginate_list(
        client.customers.list_async,
        request.to_params(),
        limit=list_filters.limit,
        fetch_all=list_filters.fetch_all,
        page_size=list_filters.page_size,
        max_results=list_filters.max_results,
    )
    if page.items or list_filters.starting_after or list_filters.ending_before:
        return OperationResult(
            success=True,
            data=page.items,
            has_more=page.has_more,
            next_page=page.next_cursor,
            message=describe_page("customers", page, cursor_param="starting_after"),
        )

    logger.debug("No exact email match, falling back to customer search")
    return await _search(client, search_filters)


@register_operation(OperationKind.LIST_CUSTOMERS)
async def list_customers(client: stripe.StripeClient, options: dict[str, Any]) -> OperationResult:
    """List customers, optionally filtered by exact email and creation date."""
    filters = CustomerListFilters.model_validate(options)
    request = build_customer_list(filters)
    page = await paginate_list(
        client.customers.list_async,
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
        message=describe_page("customers", page, cursor_param="starting_after"),
    )
