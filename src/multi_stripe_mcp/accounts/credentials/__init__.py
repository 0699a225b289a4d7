"""Credential backends for account authentication."""

from multi_stripe_mcp.accounts.credentials.base import CredentialBackend
from multi_stripe_mcp.accounts.credentials.env import EnvCredentialBackend, extract_api_keys

__all__ = ["CredentialBackend", "EnvCredentialBackend", "extract_api_keys"]
