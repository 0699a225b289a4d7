"""Tests for MCP server protocol flow."""

import json
import logging
import os
import sys
from collections.abc import AsyncIterator
from unittest.mock import MagicMock, patch

import pytest
import pytest_asyncio
from fastmcp import Client
from fastmcp.exceptions import ToolError

from multi_stripe_mcp.exceptions import ConfigError
from multi_stripe_mcp.server import configure_logging, main
from multi_stripe_mcp.tools import mcp

EXPECTED_TOOLS = {
    "get_invoice",
    "list_accounts",
    "list_customers",
    "list_invoices",
    "list_subscriptions",
    "search_customer",
    "search_customer_by_email",
    "search_invoices",
    "search_subscriptions",
}

ENV = {
    "STRIPE_1ST_ACCOUNT_APIKEY": "rk_test_first",
    "STRIPE_2ND_ACCOUNT_APIKEY": "rk_test_second",
}


@pytest_asyncio.fixture
async def client() -> AsyncIterator[Client]:
    with patch.dict(os.environ, ENV, clear=True):
        async with Client(mcp) as c:
            yield c


def _stripe_client(**endpoints: object) -> MagicMock:
    """Build a Stripe client mock; keys are "<resource>__<method>" paths."""
    stripe_client = MagicMock()
    for path, endpoint in endpoints.items():
        resource, method = path.split("__")
        setattr(getattr(stripe_client, resource), method, endpoint)
    return stripe_client


def _payload(result) -> dict:
    return json.loads(result.content[0].text)


@pytest.mark.asyncio
class TestToolDiscovery:
    async def test_lists_all_tools(self, client: Client) -> None:
        tools = await client.list_tools()
        assert {t.name for t in tools} == EXPECTED_TOOLS

    async def test_each_tool_has_description(self, client: Client) -> None:
        tools = await client.list_tools()
        for tool in tools:
            assert tool.description, f"{tool.name} has no description"

    async def test_account_argument_everywhere_but_list_accounts(self, client: Client) -> None:
        tools = await client.list_tools()
        for tool in tools:
            if tool.name == "list_accounts":
                continue
            assert "account" in tool.inputSchema["properties"], tool.name


@pytest.mark.asyncio
class TestListAccounts:
    async def test_returns_accounts(self, client: Client) -> None:
        result = await client.call_tool("list_accounts", {})
        assert "- 1st_account" in result.data
        assert "- 2nd_account" in result.data


@pytest.mark.asyncio
class TestSearchInvoices:
    async def test_fans_out_to_all_accounts(
        self, client: Client, search_endpoint, items
    ) -> None:
        endpoint = search_endpoint(items(2, "in"))
        with patch(
            "multi_stripe_mcp.accounts.service.stripe.StripeClient",
            return_value=_stripe_client(invoices__search_async=endpoint),
        ):
            result = await client.call_tool(
                "search_invoices", {"account": "all", "status": "paid"}
            )

        payload = _payload(result)
        assert list(payload) == ["1st_account", "2nd_account"]
        assert all(entry["success"] for entry in payload.values())
        assert len(endpoint.calls) == 2

    async def test_without_filters_points_to_list_tool(self, client: Client) -> None:
        with patch("multi_stripe_mcp.accounts.service.stripe.StripeClient"):
            result = await client.call_tool("search_invoices", {"account": "1st_account"})

        payload = _payload(result)
        assert payload["1st_account"]["success"] is False
        assert "list_invoices" in payload["1st_account"]["message"]

    async def test_unknown_account(self, client: Client) -> None:
        with patch("multi_stripe_mcp.accounts.service.stripe.StripeClient") as mock_cls:
            result = await client.call_tool(
                "search_invoices", {"account": "3rd", "status": "paid"}
            )

        payload = _payload(result)
        assert payload["none"]["success"] is False
        assert "1st_account, 2nd_account" in payload["none"]["message"]
        mock_cls.assert_not_called()


@pytest.mark.asyncio
class TestSearchCustomer:
    async def test_next_page_token_continues_search(
        self, client: Client, search_endpoint, items
    ) -> None:
        endpoint = search_endpoint(items(15, "cus"))
        with patch(
            "multi_stripe_mcp.accounts.service.stripe.StripeClient",
            return_value=_stripe_client(customers__search_async=endpoint),
        ):
            first = _payload(
                await client.call_tool(
                    "search_customer", {"account": "1st_account", "name": "x"}
                )
            )["1st_account"]
            second = _payload(
                await client.call_tool(
                    "search_customer",
                    {"account": "1st_account", "name": "x", "page": first["next_page"]},
                )
            )["1st_account"]

        assert first["next_page"] == "tok_10"
        assert 'page="tok_10"' in first["message"]
        assert [c["id"] for c in second["data"]] == [f"cus_{i}" for i in range(10, 15)]
        assert "next_page" not in second

    async def test_fetch_all_returns_everything(
        self, client: Client, search_endpoint, items
    ) -> None:
        endpoint = search_endpoint(items(45, "cus"))
        with patch(
            "multi_stripe_mcp.accounts.service.stripe.StripeClient",
            return_value=_stripe_client(customers__search_async=endpoint),
        ):
            result = await client.call_tool(
                "search_customer",
                {"account": "1st_account", "name": "x", "fetch_all": True},
            )

        entry = _payload(result)["1st_account"]
        assert len(entry["data"]) == 45
        assert "has_more" not in entry


@pytest.mark.asyncio
class TestListSubscriptions:
    async def test_reports_continuation(self, client: Client, list_endpoint, items) -> None:
        endpoint = list_endpoint(items(150, "sub"))
        with patch(
            "multi_stripe_mcp.accounts.service.stripe.StripeClient",
            return_value=_stripe_client(subscriptions__list_async=endpoint),
        ):
            result = await client.call_tool("list_subscriptions", {"account": "1st_account"})

        entry = _payload(result)["1st_account"]
        assert len(entry["data"]) == 100
        assert entry["has_more"] is True
        assert entry["next_page"] == "sub_99"


@pytest.mark.asyncio
class TestGetInvoice:
    async def test_upstream_error_is_isolated(self, client: Client) -> None:
        async def failing(invoice_id: str) -> None:
            raise RuntimeError(f"No such invoice: '{invoice_id}'")

        with patch(
            "multi_stripe_mcp.accounts.service.stripe.StripeClient",
            return_value=_stripe_client(invoices__retrieve_async=failing),
        ):
            result = await client.call_tool(
                "get_invoice", {"account": "all", "invoice_id": "in_missing"}
            )

        payload = _payload(result)
        message = payload["1st_account"]["message"]
        assert message == "An error occurred: No such invoice: 'in_missing'"
        assert payload["2nd_account"]["success"] is False


@pytest.mark.asyncio
class TestInvalidInvocations:
    async def test_unknown_tool(self, client: Client) -> None:
        with pytest.raises(ToolError, match="Unknown tool"):
            await client.call_tool("nonexistent_tool", {})

    async def test_missing_required_param(self, client: Client) -> None:
        with pytest.raises(ToolError, match="Missing required argument"):
            await client.call_tool("get_invoice", {"account": "1st_account"})


class TestConfigureLogging:
    @patch("multi_stripe_mcp.server.structlog.configure")
    @patch("multi_stripe_mcp.server.logging.basicConfig")
    def test_sets_root_level(self, mock_basic: MagicMock, mock_configure: MagicMock) -> None:
        configure_logging("DEBUG")

        assert mock_basic.call_args.kwargs["level"] == logging.DEBUG

    @patch("multi_stripe_mcp.server.structlog.configure")
    @patch("multi_stripe_mcp.server.logging.basicConfig")
    def test_logs_to_stderr(self, mock_basic: MagicMock, mock_configure: MagicMock) -> None:
        """stdout carries the stdio transport, so both loggers write to stderr."""
        configure_logging("WARNING")

        assert mock_basic.call_args.kwargs["stream"] is sys.stderr
        mock_configure.assert_called_once()
        assert "wrapper_class" in mock_configure.call_args.kwargs


class TestMain:
    @patch("multi_stripe_mcp.server.configure_logging")
    @patch("multi_stripe_mcp.server.mcp")
    def test_runs_stdio_server(self, mock_mcp: MagicMock, mock_logging: MagicMock) -> None:
        with patch.dict(os.environ, {"STRIPE_MCP_LOG_LEVEL": "debug"}, clear=True):
            main()

        mock_logging.assert_called_once_with("DEBUG")
        mock_mcp.run.assert_called_once_with()

    @patch("multi_stripe_mcp.server.mcp")
    def test_config_error_exits(
        self, mock_mcp: MagicMock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with (
            patch(
                "multi_stripe_mcp.server.get_settings",
                side_effect=ConfigError("Invalid value for 'max_results'"),
            ),
            pytest.raises(SystemExit) as exc_info,
        ):
            main()

        assert exc_info.value.code == 1
        assert "max_results" in capsys.readouterr().err
        mock_mcp.run.assert_not_called()
