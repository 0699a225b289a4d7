"""Tests for customer operations."""

from unittest.mock import MagicMock

import pytest

from multi_stripe_mcp.operations.customers import (
    list_customers,
    search_by_email,
    search_by_name,
)


def _client(list_endpoint, search_endpoint, listed=(), searched=()) -> MagicMock:
    client = MagicMock()
    client.customers.list_async = list_endpoint(list(listed))
    client.customers.search_async = search_endpoint(list(searched))
    return client


@pytest.mark.asyncio
class TestSearchByName:
    async def test_substring_query(self, list_endpoint, search_endpoint, items) -> None:
        client = _client(list_endpoint, search_endpoint, searched=items(3, "cus"))

        result = await search_by_name(client, {"name": "Ada", "limit": 10})

        assert result.success is True
        assert len(result.data) == 3
        assert result.message == "Found 3 customers."
        assert client.customers.search_async.calls == [{"query": 'name~"Ada"', "limit": 10}]

    async def test_name_required(self, list_endpoint, search_endpoint) -> None:
        client = _client(list_endpoint, search_endpoint)

        result = await search_by_name(client, {"name": ""})

        assert result.success is False
        assert "name is required" in result.message
        assert client.customers.search_async.calls == []

    async def test_reports_next_page_token(self, list_endpoint, search_endpoint, items) -> None:
        client = _client(list_endpoint, search_endpoint, searched=items(30, "cus"))

        result = await search_by_name(client, {"name": "Ada", "limit": 10})

        assert result.has_more is True
        assert result.next_page == "tok_10"
        assert 'page="tok_10"' in result.message


@pytest.mark.asyncio
class TestSearchByEmail:
    async def test_exact_match_from_list(self, list_endpoint, search_endpoint, items) -> None:
        client = _client(list_endpoint, search_endpoint, listed=items(1, "cus"))

        result = await search_by_email(client, {"email": "ada@example.com"})

        assert result.success is True
        assert result.data == [{"id": "cus_0", "object": "cus"}]
        assert client.customers.list_async.calls[0]["email"] == "ada@example.com"
        assert client.customers.search_async.calls == []

    async def test_falls_back_to_substring_search(
        self, list_endpoint, search_endpoint, items
    ) -> None:
        client = _client(list_endpoint, search_endpoint, searched=items(2, "cus"))

        result = await search_by_email(client, {"email": "ada@example.com", "limit": 5})

        assert result.success is True
        assert len(result.data) == 2
        assert client.customers.search_async.calls == [
            {"query": 'email~"ada@example.com"', "limit": 5}
        ]

    async def test_fallback_ignores_name(self, list_endpoint, search_endpoint) -> None:
        client = _client(list_endpoint, search_endpoint)

        await search_by_email(client, {"email": "ada@example.com", "name": "Ada"})

        assert "name~" not in client.customers.search_async.calls[0]["query"]

    async def test_page_token_continues_search(
        self, list_endpoint, search_endpoint, items
    ) -> None:
        client = _client(list_endpoint, search_endpoint, searched=items(15, "cus"))

        result = await search_by_email(
            client, {"email": "ada@example.com", "page": "tok_10", "limit": 10}
        )

        assert [c["id"] for c in result.data] == [f"cus_{i}" for i in range(10, 15)]
        assert result.has_more is False
        assert client.customers.list_async.calls == []

    async def test_list_cursor_does_not_fall_back(self, list_endpoint, search_endpoint) -> None:
        client = _client(list_endpoint, search_endpoint, listed=[{"id": "cus_0"}])

        result = await search_by_email(
            client, {"email": "ada@example.com", "starting_after": "cus_0"}
        )

        assert result.success is True
        assert result.data == []
        assert client.customers.search_async.calls == []

    async def test_fetch_all_search_fallback(self, list_endpoint, search_endpoint, items) -> None:
        client = _client(list_endpoint, search_endpoint, searched=items(45, "cus"))

        result = await search_by_email(
            client, {"email": "ada@example.com", "fetch_all": True, "page_size": 20}
        )

        assert len(result.data) == 45
        assert result.has_more is False

    async def test_email_required(self, list_endpoint, search_endpoint) -> None:
        client = _client(list_endpoint, search_endpoint)

        result = await search_by_email(client, {})

        assert result.success is False
        assert client.customers.list_async.calls == []


@pytest.mark.asyncio
class TestListCustomers:
    async def test_unfiltered(self, list_endpoint, search_endpoint, items) -> None:
        client = _client(list_endpoint, search_endpoint, listed=items(4, "cus"))

        result = await list_customers(client, {})

        assert result.success is True
        assert len(result.data) == 4
        assert result.has_more is False
        assert client.customers.list_async.calls == [{"limit": 10}]

    async def test_created_after_becomes_range(self, list_endpoint, search_endpoint) -> None:
        client = _client(list_endpoint, search_endpoint)

        await list_customers(client, {"created_after": 1735689600})

        assert client.customers.list_async.calls[0]["created"] == {"gte": 1735689600}

    async def test_continuation_cursor(self, list_endpoint, search_endpoint, items) -> None:
        client = _client(list_endpoint, search_endpoint, listed=items(25, "cus"))

        result = await list_customers(client, {"limit": 10})

        assert result.has_more is True
        assert result.next_page == "cus_9"
        assert 'starting_after="cus_9"' in result.message
