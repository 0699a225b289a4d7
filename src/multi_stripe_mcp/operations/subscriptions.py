"""Subscription operations."""

from typing import Any

import stripe

from multi_stripe_mcp.exceptions import InvalidQueryError
from multi_stripe_mcp.operations.base import OperationKind, OperationResult
from multi_stripe_mcp.operations.registry import register_operation
from multi_stripe_mcp.pagination import describe_page, paginate_list, paginate_search
from multi_stripe_mcp.query import (
    SubscriptionListFilters,
    SubscriptionSearchFilters,
    build_subscription_list,
    build_subscription_search,
)


@register_operation(OperationKind.SEARCH_SUBSCRIPTIONS)
async def search(client: stripe.StripeClient, options: dict[str, Any]) -> OperationResult:
    filters = SubscriptionSearchFilters.model_validate(options)
    try:
        request = build_subscription_search(filters)
    except InvalidQueryError as e:
        return OperationResult.failure(str(e))

    page = await paginate_search(
        client.subscriptions.search_async,
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
        message=describe_page("subscriptions", page, cursor_param="page"),
    )


@register_operation(OperationKind.LIST_SUBSCRIPTIONS)
async def list_subscriptions(client: stripe.StripeClient, options: dict[str, Any]) -> OperationResult:
    """List subscriptions for a customer, status or price.

    Without fetch_all the result stops at the configured cap; with it, every
    page is fetched.
    """
    filters = SubscriptionListFilters.model_validate(options)
    request = build_subscription_list(filters)
    page = await paginate_list(
        client.subscriptions.list_async,
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
        message=describe_page("subscriptions", page, cursor_param="starting_after"),
    )
