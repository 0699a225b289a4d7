"""An MCP server for read-only queries across multiple Stripe accounts."""

from multi_stripe_mcp.accounts import AccountService, EnvCredentialBackend, extract_api_keys
from multi_stripe_mcp.config import Settings
from multi_stripe_mcp.dispatcher import AccountOutcome, Dispatcher, error_message
from multi_stripe_mcp.operations import OperationKind, OperationResult
from multi_stripe_mcp.pagination import PageResult, paginate_list, paginate_search
from multi_stripe_mcp.response import format_response

__version__ = "0.1.0"

__all__ = [
    "AccountOutcome",
    "AccountService",
    "Dispatcher",
    "EnvCredentialBackend",
    "OperationKind",
    "OperationResult",
    "PageResult",
    "Settings",
    "error_message",
    "extract_api_keys",
    "format_response",
    "paginate_list",
    "paginate_search",
]
