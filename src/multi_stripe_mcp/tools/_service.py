"""Shared dispatcher creation helpers for tools."""

from typing import Any

from mcp.types import TextContent

from multi_stripe_mcp.accounts.credentials.base import CredentialBackend
from multi_stripe_mcp.accounts.credentials.env import EnvCredentialBackend
from multi_stripe_mcp.accounts.service import AccountService
from multi_stripe_mcp.config import get_settings
from multi_stripe_mcp.defaults import MAX_PAGE_SIZE
from multi_stripe_mcp.dispatcher import Dispatcher
from multi_stripe_mcp.operations import OperationKind
from multi_stripe_mcp.response import format_response


def get_credential_backend() -> CredentialBackend:
    return EnvCredentialBackend()


def get_account_service() -> AccountService:
    """Build an account service from the current environment.

    Keys are re-read on every call so rotated keys take effect without a
    restart. The API version comes from the process-wide settings.

    Raises:
        ConfigError: If the settings are invalid.
    """
    settings = get_settings()
    api_keys = get_credential_backend().load_api_keys()
    return AccountService(api_keys, api_version=settings.api_version)


def create_dispatcher() -> Dispatcher:
    return Dispatcher(get_account_service())


def list_configured_accounts() -> list[str]:
    """List all registered account names.

    Returns:
        List of account names.
    """
    return get_account_service().list_accounts()


def validate_limit(limit: int) -> None:
    """Raise ValueError unless limit is a valid Stripe page size."""
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}")


def require_value(name: str, value: str | None) -> None:
    if not value or not value.strip():
        raise ValueError(f"{name} must not be empty")


def pagination_options() -> dict[str, Any]:
    """Pagination bounds from settings, merged into every list/search request."""
    settings = get_settings()
    return {
        "max_results": settings.max_results,
        "page_size": settings.fetch_all_page_size,
    }


async def run_operation(kind: OperationKind, options: dict[str, Any]) -> list[TextContent]:
    """Dispatch a registered operation and format the outcomes as the tool response."""
    dispatcher = create_dispatcher()
    outcomes = await dispatcher.execute_operation({**pagination_options(), **options}, kind)
    return format_response(outcomes)
