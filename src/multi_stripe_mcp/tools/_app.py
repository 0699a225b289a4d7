"""Shared FastMCP application instance."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from multi_stripe_mcp.accounts.credentials.env import EnvCredentialBackend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Report the registered accounts before accepting connections."""
    accounts = list(EnvCredentialBackend().load_api_keys())
    if accounts:
        logger.info("Registered Stripe accounts: %s", ", ".join(accounts))
    else:
        logger.warning(
            "No Stripe accounts registered. Set STRIPE_<NAME>_ACCOUNT_APIKEY "
            "environment variables holding restricted keys (rk_live_/rk_test_)."
        )
    yield


# Create the shared FastMCP server instance
mcp = FastMCP(
    name="multi-stripe-mcp",
    instructions=(
        "Read-only access to several Stripe accounts. Every tool takes an "
        '"account" argument: an account name from list_accounts, or "all" '
        "to query every account."
    ),
    lifespan=_lifespan,
)
