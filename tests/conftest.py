"""Shared fixtures and in-memory stand-ins for Stripe list and search endpoints."""

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest

from multi_stripe_mcp.config import get_settings


def make_items(count: int, prefix: str = "obj") -> list[dict[str, Any]]:
    return [{"id": f"{prefix}_{i}", "object": prefix} for i in range(count)]


class FakeListEndpoint:
    """Cursor-paginated list endpoint over a fixed, newest-first item sequence."""

    def __init__(self, items: list[dict[str, Any]]) -> None:
        self.items = items
        self.calls: list[dict[str, Any]] = []

    def _index(self, item_id: str) -> int:
        return next(i for i, item in enumerate(self.items) if item["id"] == item_id)

    async def __call__(self, params: dict[str, Any]) -> SimpleNamespace:
        self.calls.append(dict(params))
        limit = params.get("limit", 10)
        if params.get("ending_before"):
            end = self._index(params["ending_before"])
            start = max(0, end - limit)
            return SimpleNamespace(data=self.items[start:end], has_more=start > 0)

        start = 0
        if params.get("starting_after"):
            start = self._index(params["starting_after"]) + 1
        end = start + limit
        return SimpleNamespace(data=self.items[start:end], has_more=end < len(self.items))


class FakeSearchEndpoint:
    """Token-paginated search endpoint; tokens encode the next offset."""

    def __init__(self, items: list[dict[str, Any]]) -> None:
        self.items = items
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, params: dict[str, Any]) -> SimpleNamespace:
        self.calls.append(dict(params))
        limit = params.get("limit", 10)
        start = int(params["page"].removeprefix("tok_")) if params.get("page") else 0
        end = start + limit
        has_more = end < len(self.items)
        return SimpleNamespace(
            data=self.items[start:end],
            has_more=has_more,
            next_page=f"tok_{end}" if has_more else None,
        )


def static_page(data: list[Any], has_more: bool, next_page: str | None = None) -> Any:
    """Endpoint that returns the same page for every request."""

    async def fetch(params: dict[str, Any]) -> SimpleNamespace:
        return SimpleNamespace(data=data, has_more=has_more, next_page=next_page)

    return fetch


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; start each test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def items() -> Callable[..., list[dict[str, Any]]]:
    return make_items


@pytest.fixture
def list_endpoint() -> type[FakeListEndpoint]:
    return FakeListEndpoint


@pytest.fixture
def search_endpoint() -> type[FakeSearchEndpoint]:
    return FakeSearchEndpoint


@pytest.fixture
def stuck_endpoint() -> Callable[..., Any]:
    return static_page
