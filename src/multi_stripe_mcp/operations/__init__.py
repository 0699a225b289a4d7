"""Read-only Stripe operations with decorator-based registration."""

# isort: skip_file

from multi_stripe_mcp.operations.base import Operation, OperationKind, OperationResult
from multi_stripe_mcp.operations.registry import (
    get_operation,
    get_operation_kinds,
    register_operation,
)

# Import operation modules to trigger registration via decorators
# These must be imported after registry to avoid circular imports
from multi_stripe_mcp.operations import customers as _customers  # noqa: F401
from multi_stripe_mcp.operations import invoices as _invoices  # noqa: F401
from multi_stripe_mcp.operations import subscriptions as _subscriptions  # noqa: F401

__all__ = [
    "Operation",
    "OperationKind",
    "OperationResult",
    "get_operation",
    "get_operation_kinds",
    "register_operation",
]
