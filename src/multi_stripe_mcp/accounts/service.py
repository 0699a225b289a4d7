"""Account service for building per-account Stripe clients."""

from collections.abc import Mapping

import stripe
from pydantic import SecretStr

from multi_stripe_mcp.defaults import DEFAULT_API_VERSION
from multi_stripe_mcp.exceptions import AccountNotFoundError


class AccountService:
    """Service for accessing multiple Stripe accounts by name.

    Holds a snapshot of the registered API keys for one dispatch and builds an
    isolated client for each account on request.
    """

    def __init__(
        self,
        api_keys: Mapping[str, SecretStr],
        api_version: str = DEFAULT_API_VERSION,
    ) -> None:
        """Initialize the account service.

        Args:
            api_keys: Mapping of account name to restricted API key.
            api_version: Stripe API version passed to every client.
        """
        self._api_keys = dict(api_keys)
        self._api_version = api_version

    @property
    def api_version(self) -> str:
        return self._api_version

    def list_accounts(self) -> list[str]:
        """Return list of registered account names.

        Returns:
            List of account names in the order they were registered.
        """
        return list(self._api_keys.keys())

    def has_account(self, account_name: str) -> bool:
        return account_name in self._api_keys

    def get_client(self, account_name: str) -> stripe.StripeClient:
        """Create a Stripe client for the specified account.

        Args:
            account_name: The registered name of the account.

        Returns:
            A new StripeClient bound to the account's key and the pinned API version.

        Raises:
            AccountNotFoundError: If the account name is not registered.
        """
        api_key = self._api_keys.get(account_name)
        if api_key is None:
            raise AccountNotFoundError(account_name)

        return stripe.StripeClient(
            api_key.get_secret_value(),
            stripe_version=self._api_version,
        )
