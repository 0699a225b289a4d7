"""Build Stripe list and search requests from structured filter parameters.

Stripe exposes two retrieval modes with incompatible contracts:

* list: cursor pagination (``starting_after`` / ``ending_before``) and a small
  set of exact-match filters.
* search: page-token pagination (``page`` / ``next_page``) and a query
  language where predicates are joined with ``AND``. ``field:"value"`` is an
  exact match, ``field~"value"`` a substring match.

Everything in this module is pure: the same filters always yield the same
request.
"""

from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from multi_stripe_mcp.defaults import (
    DEFAULT_FETCH_ALL_PAGE_SIZE,
    DEFAULT_LIMIT,
    DEFAULT_MAX_RESULTS,
    MAX_PAGE_SIZE,
)
from multi_stripe_mcp.exceptions import InvalidQueryError

Timestamp = int | datetime | date


# --- Filter parameters ---


class PageOptions(BaseModel):
    """Paging controls shared by every list and search operation.

    Attributes:
        limit: Number of items wanted when not fetching everything.
        fetch_all: Traverse every page, lifting the result cap.
        max_results: Hard cap on accumulated items for bounded fetches.
        page_size: Page size used while traversing with fetch_all.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_PAGE_SIZE)
    fetch_all: bool = False
    max_results: int = Field(default=DEFAULT_MAX_RESULTS, ge=1, le=MAX_PAGE_SIZE)
    page_size: int = Field(default=DEFAULT_FETCH_ALL_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class ListOptions(PageOptions):
    starting_after: str | None = None
    ending_before: str | None = None


class SearchOptions(PageOptions):
    page: str | None = None


class CustomerSearchFilters(SearchOptions):
    name: str | None = None
    email: str | None = None
    created_after: Timestamp | None = None


class CustomerListFilters(ListOptions):
    email: str | None = None
    created_after: Timestamp | None = None


class SubscriptionSearchFilters(SearchOptions):
    status: str | None = None
    created_after: Timestamp | None = None


class SubscriptionListFilters(ListOptions):
    customer_id: str | None = None
    status: str | None = None
    price: str | None = None
    created_after: Timestamp | None = None


class InvoiceSearchFilters(SearchOptions):
    customer_id: str | None = None
    status: str | None = None
    total: int | None = None
    subscription: str | None = None
    number: str | None = None
    created_after: Timestamp | None = None


class InvoiceListFilters(ListOptions):
    customer_id: str | None = None
    status: str | None = None
    subscription: str | None = None
    created_after: Timestamp | None = None


# --- Requests ---


class ListRequest(BaseModel):
    """A cursor-paginated list request; the pagination driver sets the page size."""

    model_config = ConfigDict(frozen=True)

    filters: dict[str, Any] = Field(default_factory=dict)
    starting_after: str | None = None
    ending_before: str | None = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = dict(self.filters)
        # Stripe rejects both cursors at once; starting_after wins
        if self.starting_after:
            params["starting_after"] = self.starting_after
        elif self.ending_before:
            params["ending_before"] = self.ending_before
        return params


class SearchRequest(BaseModel):
    """A page-token-paginated search request; the pagination driver sets the page size."""

    model_config = ConfigDict(frozen=True)

    query: str
    page: str | None = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"query": self.query}
        if self.page:
            params["page"] = self.page
        return params


# --- Predicates ---


def quote(value: str) -> str:
    """Quote a string value for the search query language."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def exact(field: str, value: str) -> str:
    return f"{field}:{quote(value)}"


def fuzzy(field: str, value: str) -> str:
    return f"{field}~{quote(value)}"


def numeric(field: str, value: int) -> str:
    return f"{field}:{int(value)}"


def to_timestamp(value: Timestamp) -> int:
    """Convert a date, datetime or unix timestamp to a unix timestamp.

    Naive datetimes and plain dates are taken as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if isinstance(value, date):
        return int(datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp())
    return int(value)


def created_since(value: Timestamp) -> str:
    return f"created>={to_timestamp(value)}"


def join_predicates(predicates: Iterable[str], list_tool: str | None = None) -> str:
    """Join predicates into one query string.

    Raises:
        InvalidQueryError: If there are no predicates. An empty search would
            page through every object, which is what the list tools are for.
    """
    parts = [p for p in predicates if p]
    if not parts:
        hint = f" Use the {list_tool} tool to retrieve unfiltered results." if list_tool else ""
        raise InvalidQueryError(
            f"No search filters were given.{hint}",
            suggested_tool=list_tool,
        )
    return " AND ".join(parts)


def _created_range(value: Timestamp | None) -> dict[str, Any]:
    if value is None:
        return {}
    return {"created": {"gte": to_timestamp(value)}}


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None and value != ""}


# --- Customers ---


def build_customer_search(filters: CustomerSearchFilters) -> SearchRequest:
    """Customer search: name and email are substring matches."""
    predicates = []
    if filters.name:
        predicates.append(fuzzy("name", filters.name))
    if filters.email:
        predicates.append(fuzzy("email", filters.email))
    if filters.created_after is not None:
        predicates.append(created_since(filters.created_after))

    return SearchRequest(
        query=join_predicates(predicates, list_tool="list_customers"),
        page=filters.page,
    )


def build_customer_list(filters: CustomerListFilters) -> ListRequest:
    return ListRequest(
        filters=_compact({"email": filters.email, **_created_range(filters.created_after)}),
        starting_after=filters.starting_after,
        ending_before=filters.ending_before,
    )


# --- Subscriptions ---


def build_subscription_search(filters: SubscriptionSearchFilters) -> SearchRequest:
    predicates = []
    if filters.status:
        predicates.append(exact("status", filters.status))
    if filters.created_after is not None:
        predicates.append(created_since(filters.created_after))

    return SearchRequest(
        query=join_predicates(predicates, list_tool="list_subscriptions"),
        page=filters.page,
    )


def build_subscription_list(filters: SubscriptionListFilters) -> ListRequest:
    return ListRequest(
        filters=_compact(
            {
                "customer": filters.customer_id,
                "status": filters.status,
                "price": filters.price,
                **_created_range(filters.created_after),
            }
        ),
        starting_after=filters.starting_after,
        ending_before=filters.ending_before,
    )


# --- Invoices ---


def build_invoice_search(filters: InvoiceSearchFilters) -> SearchRequest:
    """Invoice search: every field is an exact match, total is numeric (minor units)."""
    predicates = []
    if filters.customer_id:
        predicates.append(exact("customer", filters.customer_id))
    if filters.status:
        predicates.append(exact("status", filters.status))
    if filters.total is not None:
        predicates.append(numeric("total", filters.total))
    if filters.subscription:
        predicates.append(exact("subscription", filters.subscription))
    if filters.number:
        predicates.append(exact("number", filters.number))
    if filters.created_after is not None:
        predicates.append(created_since(filters.created_after))

    return SearchRequest(
        query=join_predicates(predicates, list_tool="list_invoices"),
        page=filters.page,
    )


def build_invoice_list(filters: InvoiceListFilters) -> ListRequest:
    return ListRequest(
        filters=_compact(
            {
                "customer": filters.customer_id,
                "status": filters.status,
                "subscription": filters.subscription,
                **_created_range(filters.created_after),
            }
        ),
        starting_after=filters.starting_after,
        ending_before=filters.ending_before,
    )
