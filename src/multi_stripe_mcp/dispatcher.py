"""Fan read-only operations out across registered Stripe accounts.

The dispatcher resolves an ``account`` selector to one account or to every
registered account, runs the operation once per account with that account's
own client, and turns each run into an :class:`AccountOutcome`. A failure in
one account never stops the others and never escapes the dispatcher.
"""

from collections.abc import Mapping
from typing import Any

import stripe
import structlog
from pydantic import BaseModel, ConfigDict

from multi_stripe_mcp.accounts.service import AccountService
from multi_stripe_mcp.operations import Operation, OperationKind, OperationResult, get_operation

logger = structlog.get_logger()

ALL_ACCOUNTS = "all"

# Account name used for the synthetic outcome of an unresolvable selector
NO_ACCOUNT = "none"

DEFAULT_SUCCESS_MESSAGE = "Operation completed successfully."


class AccountOutcome(BaseModel):
    """Result of one operation run against one account."""

    model_config = ConfigDict(frozen=True)

    account_name: str
    success: bool
    message: str
    data: Any = None
    has_more: bool | None = None
    next_page: str | None = None


def error_message(error: object) -> str:
    """Extract a readable message from anything an operation may raise.

    Never raises.
    """
    try:
        if isinstance(error, stripe.StripeError):
            return error.user_message or str(error) or type(error).__name__
        if isinstance(error, BaseException):
            return str(error) or type(error).__name__
        return str(error)
    except Exception:
        return f"<unprintable {type(error).__name__}>"


class Dispatcher:
    """Runs operations against one or all registered accounts.

    Accounts run sequentially in registration order, so outcomes come back in
    that order.
    """

    def __init__(self, accounts: AccountService) -> None:
        """Initialize the dispatcher.

        Args:
            accounts: Account service holding the key snapshot for this dispatch.
        """
        self._accounts = accounts

    async def execute_operation(
        self,
        options: Mapping[str, Any],
        operation: Operation | OperationKind,
    ) -> list[AccountOutcome]:
        """Run an operation for the account(s) selected by ``options["account"]``.

        Args:
            options: Filter parameters plus an optional ``account`` selector
                (an account name or "all").
            operation: The operation, or the kind of a registered operation.

        Returns:
            One outcome per targeted account, or a single failure outcome when
            the selector is missing or unknown.
        """
        operation_options = dict(options)
        account = operation_options.pop("account", None)
        handler = get_operation(operation) if isinstance(operation, OperationKind) else operation

        if account and account != ALL_ACCOUNTS and self._accounts.has_account(account):
            return [await self._execute_for_account(account, handler, operation_options)]

        if account == ALL_ACCOUNTS:
            outcomes = []
            for account_name in self._accounts.list_accounts():
                outcomes.append(
                    await self._execute_for_account(account_name, handler, operation_options)
                )
            return outcomes

        logger.warning("Invalid account specified", account=account)
        return [self._invalid_selector_outcome(account)]

    def _invalid_selector_outcome(self, account: str | None) -> AccountOutcome:
        available = ", ".join(self._accounts.list_accounts()) or "none"
        if account:
            message = f'Account "{account}" was not found. Available accounts: {available}'
        else:
            message = (
                f'No account was specified. Pass an account name or "{ALL_ACCOUNTS}". '
                f"Available accounts: {available}"
            )
        return AccountOutcome(account_name=NO_ACCOUNT, success=False, message=message)

    async def _execute_for_account(
        self,
        account_name: str,
        operation: Operation,
        options: Mapping[str, Any],
    ) -> AccountOutcome:
        """Run the operation for one account, converting any failure into an outcome."""
        logger.info("Executing operation", account=account_name)
        try:
            client = self._accounts.get_client(account_name)
            # Each account gets its own copy of the options
            result = OperationResult.model_validate(await operation(client, dict(options)))
        except Exception as exc:
            message = error_message(exc)
            logger.error("Operation failed", account=account_name, error=message)
            return AccountOutcome(
                account_name=account_name,
                success=False,
                message=f"An error occurred: {message}",
            )

        if not result.success:
            message = result.message or (
                error_message(result.error) if result.error is not None else "Operation failed."
            )
            logger.error("Operation reported failure", account=account_name, error=message)
            return AccountOutcome(account_name=account_name, success=False, message=message)

        return AccountOutcome(
            account_name=account_name,
            success=True,
            message=result.message or DEFAULT_SUCCESS_MESSAGE,
            data=result.data,
            has_more=result.has_more,
            next_page=result.next_page,
        )
