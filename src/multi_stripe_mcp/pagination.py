"""Drive Stripe list and search pagination to a bounded or exhaustive result."""

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from multi_stripe_mcp.defaults import (
    DEFAULT_FETCH_ALL_PAGE_SIZE,
    DEFAULT_MAX_RESULTS,
)
from multi_stripe_mcp.exceptions import PaginationError

logger = logging.getLogger(__name__)

# Called with one request's params; returns a Stripe ListObject or SearchResultObject
FetchPage = Callable[[dict[str, Any]], Awaitable[Any]]

_CURSOR_PARAMS = ("starting_after", "ending_before")


class PageResult(BaseModel):
    """Items accumulated over one or more upstream pages.

    Attributes:
        items: The accumulated items, in upstream order.
        has_more: Whether the upstream source holds more items.
        next_cursor: Value to continue from (a list cursor or a search page
            token), set only when has_more is True.
    """

    items: list[Any] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None

    @property
    def count(self) -> int:
        return len(self.items)


def _item_id(item: Any) -> str | None:
    if isinstance(item, Mapping):
        return item.get("id")
    return getattr(item, "id", None)


def _result_cap(limit: int, fetch_all: bool, max_results: int) -> int | None:
    if fetch_all:
        return None
    return max(1, min(limit, max_results))


def _request_size(cap: int | None, page_size: int, collected: int) -> int:
    if cap is None:
        return page_size
    return min(page_size, cap - collected)


async def paginate_list(
    fetch_page: FetchPage,
    params: Mapping[str, Any],
    *,
    limit: int,
    fetch_all: bool = False,
    page_size: int = DEFAULT_FETCH_ALL_PAGE_SIZE,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> PageResult:
    """Walk a cursor-paginated list endpoint.

    Pages forward with ``starting_after`` (next cursor = id of the last item),
    or backward with ``ending_before`` when the request carries it (next
    cursor = id of the first item). Items keep upstream order either way.

    Args:
        fetch_page: Coroutine function performing one list call.
        params: Base request params (filters and an optional initial cursor).
        limit: Items wanted when not fetching everything.
        fetch_all: Traverse until the source is exhausted, ignoring the cap.
        page_size: Page size used while fetching everything.
        max_results: Hard cap on items for bounded fetches.

    Raises:
        PaginationError: If the cursor fails to advance.
    """
    backward = bool(params.get("ending_before")) and not params.get("starting_after")
    cursor_param = "ending_before" if backward else "starting_after"
    cursor: str | None = params.get(cursor_param)

    base = {k: v for k, v in params.items() if k not in (*_CURSOR_PARAMS, "limit")}
    cap = _result_cap(limit, fetch_all, max_results)
    size = page_size if fetch_all else cap
    items: list[Any] = []

    while True:
        request = {**base, "limit": _request_size(cap, size, len(items))}
        if cursor:
            request[cursor_param] = cursor

        page = await fetch_page(request)
        data = list(page.data)
        has_more = bool(page.has_more)

        if cap is not None and len(items) + len(data) > cap:
            # Keep the items adjacent to the cursor
            remaining = cap - len(items)
            data = data[-remaining:] if backward else data[:remaining]
            has_more = True
        # Backward pages precede what was already collected
        items = data + items if backward else items + data

        if not has_more:
            return PageResult(items=items)

        if not data:
            raise PaginationError(cursor)
        next_cursor = _item_id(data[0] if backward else data[-1])
        if not next_cursor or next_cursor == cursor:
            raise PaginationError(cursor)
        cursor = next_cursor

        if cap is not None and len(items) >= cap:
            return PageResult(items=items, has_more=True, next_cursor=cursor)

        logger.debug("Fetching next list page (%s=%s, collected=%d)", cursor_param, cursor, len(items))


async def paginate_search(
    fetch_page: FetchPage,
    params: Mapping[str, Any],
    *,
    limit: int,
    fetch_all: bool = False,
    page_size: int = DEFAULT_FETCH_ALL_PAGE_SIZE,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> PageResult:
    """Walk a token-paginated search endpoint.

    Each response carries ``has_more`` and an opaque ``next_page`` token that is
    passed back as ``page``. Arguments match :func:`paginate_list`.

    Raises:
        PaginationError: If the page token fails to advance.
    """
    token: str | None = params.get("page")
    base = {k: v for k, v in params.items() if k not in ("page", "limit")}
    cap = _result_cap(limit, fetch_all, max_results)
    size = page_size if fetch_all else cap
    items: list[Any] = []

    while True:
        request = {**base, "limit": _request_size(cap, size, len(items))}
        if token:
            request["page"] = token

        page = await fetch_page(request)
        data = list(page.data)
        has_more = bool(page.has_more)
        next_page = getattr(page, "next_page", None)

        if cap is not None and len(items) + len(data) > cap:
            # A page token cannot resume mid-page, so no continuation token
            items.extend(data[: cap - len(items)])
            return PageResult(items=items, has_more=True)
        items.extend(data)

        if not has_more:
            return PageResult(items=items)

        if not data or not next_page or next_page == token:
            raise PaginationError(token)
        token = next_page

        if cap is not None and len(items) >= cap:
            return PageResult(items=items, has_more=True, next_cursor=token)

        logger.debug("Fetching next search page (page=%s, collected=%d)", token, len(items))


def describe_page(noun: str, result: PageResult, *, cursor_param: str) -> str:
    """Build the human-readable count summary for a list or search result.

    Args:
        noun: Plural resource name, e.g. "invoices".
        result: The pagination result.
        cursor_param: Request parameter that continues from ``next_cursor``.
    """
    summary = f"Found {result.count} {noun}."
    if result.has_more:
        if result.next_cursor:
            summary += (
                f" More {noun} are available: pass {cursor_param}=\"{result.next_cursor}\""
                " to continue, or fetch_all=true to retrieve everything."
            )
        else:
            summary += f" More {noun} are available: pass fetch_all=true to retrieve everything."
    return summary
