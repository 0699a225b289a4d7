"""Operation registry for decorator-based registration."""

from collections.abc import Callable

from multi_stripe_mcp.operations.base import Operation, OperationKind

# Global registry of operation handlers
_operation_registry: dict[OperationKind, Operation] = {}


def register_operation(kind: OperationKind) -> Callable[[Operation], Operation]:
    """Decorator to register an operation handler in the global registry.

    Usage:
        @register_operation(OperationKind.LIST_INVOICES)
        async def list_invoices(client, options):
            ...
    """

    def decorator(func: Operation) -> Operation:
        _operation_registry[kind] = func
        return func

    return decorator


def get_operation(kind: OperationKind) -> Operation:
    """Look up a registered operation handler.

    Raises:
        KeyError: If no handler is registered for the kind.
    """
    if kind not in _operation_registry:
        raise KeyError(f"Unknown operation: {kind.value}")
    return _operation_registry[kind]


def get_operation_kinds() -> list[OperationKind]:
    """Get list of all registered operation kinds."""
    return list(_operation_registry.keys())
