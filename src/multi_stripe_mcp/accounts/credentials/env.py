"""Environment variable credential backend."""

import logging
import os
from collections.abc import Mapping

from pydantic import SecretStr

from multi_stripe_mcp.accounts.credentials.base import CredentialBackend

logger = logging.getLogger(__name__)

ACCOUNT_PREFIX = "STRIPE_"
ACCOUNT_MARKER = "_ACCOUNT_"
KEY_SUFFIX = "_APIKEY"

# Only restricted keys are accepted; secret keys (sk_) grant write access
RESTRICTED_KEY_PREFIXES = ("rk_live_", "rk_test_")


def is_account_key(env_key: str) -> bool:
    """Return True if an environment variable name follows the account naming convention."""
    return (
        env_key.startswith(ACCOUNT_PREFIX)
        and ACCOUNT_MARKER in env_key
        and env_key.endswith(KEY_SUFFIX)
    )


def is_restricted_key(value: str) -> bool:
    """Return True if the value looks like a Stripe restricted API key."""
    return value.startswith(RESTRICTED_KEY_PREFIXES)


def account_name_from_key(env_key: str) -> str:
    """Derive the public account name from an environment variable name.

    For example:
    - "STRIPE_1ST_ACCOUNT_APIKEY" -> "1st_account"
    - "STRIPE_JP_ACCOUNT_APIKEY" -> "jp_account"
    """
    return env_key[len(ACCOUNT_PREFIX) : -len(KEY_SUFFIX)].lower()


def extract_api_keys(env: Mapping[str, str | None]) -> dict[str, SecretStr]:
    """Extract Stripe API keys from an environment mapping.

    Entries that do not follow the naming convention, are empty, or hold
    anything other than a restricted key are left out. Never raises.
    """
    api_keys: dict[str, SecretStr] = {}
    for env_key, value in env.items():
        if not is_account_key(env_key) or not value:
            continue
        if not is_restricted_key(value):
            logger.warning(
                "Ignoring %s: only restricted API keys (rk_live_/rk_test_) are accepted",
                env_key,
            )
            continue
        api_keys[account_name_from_key(env_key)] = SecretStr(value)
    return api_keys


class EnvCredentialBackend(CredentialBackend):
    """Credential backend using environment variables.

    Looks for restricted keys in environment variables named:
    STRIPE_{NAME}_ACCOUNT_APIKEY

    The account name is the variable name without the STRIPE_ prefix and
    _APIKEY suffix, lowercased.
    For example:
    - STRIPE_1ST_ACCOUNT_APIKEY -> account "1st_account"
    - STRIPE_EU_ACCOUNT_APIKEY -> account "eu_account"
    """

    def __init__(self, environ: Mapping[str, str | None] | None = None) -> None:
        self._environ = environ

    def load_api_keys(self) -> dict[str, SecretStr]:
        environ = os.environ if self._environ is None else self._environ
        api_keys = extract_api_keys(environ)
        logger.debug("Loaded %d Stripe account key(s) from environment", len(api_keys))
        return api_keys
