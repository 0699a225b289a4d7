"""Operation result model and the operation type shared by every resource."""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

import stripe
from pydantic import BaseModel, Field, model_validator


class OperationKind(str, Enum):
    """Identifier of a registered read-only operation."""

    SEARCH_CUSTOMERS_BY_NAME = "customers.search_by_name"
    SEARCH_CUSTOMERS_BY_EMAIL = "customers.search_by_email"
    LIST_CUSTOMERS = "customers.list"
    SEARCH_SUBSCRIPTIONS = "subscriptions.search"
    LIST_SUBSCRIPTIONS = "subscriptions.list"
    SEARCH_INVOICES = "invoices.search"
    LIST_INVOICES = "invoices.list"
    GET_INVOICE = "invoices.get"


class OperationResult(BaseModel):
    """Result of one operation against one account.

    Attributes:
        success: Whether the operation succeeded.
        data: Returned Stripe object(s); empty on failure.
        error: Upstream error detail, if any; an exception or any other value.
        message: Human-readable summary.
        has_more: Set by list/search operations when more items exist.
        next_page: Cursor or page token to continue from.
    """

    success: bool
    data: Any = Field(default_factory=list)
    error: Any = None
    message: str | None = None
    has_more: bool | None = None
    next_page: str | None = None

    @model_validator(mode="after")
    def _failure_has_no_data(self) -> "OperationResult":
        if not self.success:
            if self.data:
                raise ValueError("failed operation results must not carry data")
            if not self.message and self.error is None:
                raise ValueError("failed operation results need a message or error")
        return self

    @classmethod
    def failure(cls, message: str, error: Any = None) -> "OperationResult":
        return cls(success=False, data=[], message=message, error=error)


Operation = Callable[[stripe.StripeClient, dict[str, Any]], Awaitable[OperationResult]]
