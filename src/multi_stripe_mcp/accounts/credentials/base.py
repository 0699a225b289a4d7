"""Abstract base class for credential backends."""

from abc import ABC, abstractmethod

from pydantic import SecretStr


class CredentialBackend(ABC):
    """Abstract interface for Stripe API key storage.

    Credential backends are responsible for producing the mapping of account
    names to restricted API keys. Implementations are consulted on every tool
    invocation, so keys rotated between calls are picked up.
    """

    @abstractmethod
    def load_api_keys(self) -> dict[str, SecretStr]:
        """Return the registered accounts and their API keys.

        Returns:
            Mapping of account name to API key, in registration order.
        """
        ...
