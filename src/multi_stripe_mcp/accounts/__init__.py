"""Account management module for multi-account support."""

from multi_stripe_mcp.accounts.credentials import (
    CredentialBackend,
    EnvCredentialBackend,
    extract_api_keys,
)
from multi_stripe_mcp.accounts.service import AccountService

__all__ = [
    "AccountService",
    "CredentialBackend",
    "EnvCredentialBackend",
    "extract_api_keys",
]
