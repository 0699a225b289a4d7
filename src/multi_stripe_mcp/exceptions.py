"""Custom exceptions for multi-stripe-mcp."""


class MultiStripeError(Exception):
    """Base exception for multi-stripe-mcp."""


class ConfigError(MultiStripeError):
    """Raised when there is a configuration error.

    When the error comes from a config file, the location is folded into the
    message so it reads well in a startup failure.
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        self.file_path = file_path
        self.line = line
        self.col = col
        full_message = message
        if file_path:
            location = f" in {file_path}"
            if line is not None:
                location += f" at line {line}"
                if col is not None:
                    location += f", column {col}"
            full_message = f"Configuration error{location}: {message}"
        super().__init__(full_message)


class AccountNotFoundError(MultiStripeError):
    """Raised when a requested account is not registered."""

    def __init__(self, account_name: str) -> None:
        self.account_name = account_name
        super().__init__(f"Account not found: {account_name}")


class InvalidQueryError(MultiStripeError):
    """Raised when filter parameters cannot form a valid request."""

    def __init__(self, message: str, suggested_tool: str | None = None) -> None:
        self.suggested_tool = suggested_tool
        super().__init__(message)


class PaginationError(MultiStripeError):
    """Raised when an upstream cursor or page token fails to advance."""

    def __init__(self, cursor: str | None) -> None:
        self.cursor = cursor
        super().__init__(f"Pagination cursor did not advance (cursor={cursor!r})")
