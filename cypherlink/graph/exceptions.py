"""
Custom exceptions for the graph module.

Exception naming avoids shadowing Python builtins (ConnectionError,
TimeoutError). Every failure of Transaction.execute() is a
TransactionError, so callers can catch one type for the whole exchange.
"""

from __future__ import annotations

from typing import Any


class CypherLinkError(Exception):
    """Base exception for all cypherlink errors."""

    pass


class TransactionReuseError(CypherLinkError):
    """Raised when a transaction is used after execute() was invoked.

    Raised synchronously, before any network activity.
    """

    def __init__(self, message: str = "Can't reuse transaction") -> None:
        super().__init__(message)


class InvalidParameterError(CypherLinkError, ValueError):
    """Raised by add_query() when parameters cannot be sent as JSON.

    The statement is not appended.
    """

    def __init__(
        self,
        message: str,
        statement: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.statement = statement
        self.cause = cause


class TransactionError(CypherLinkError):
    """Base exception for failures surfaced by Transaction.execute()."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize with message and optional cause.

        Args:
            message: Human-readable error description
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.cause = cause


class TransportFailure(TransactionError):
    """Raised when the statement request returns neither 200 nor 201.

    A best-effort rollback has been dispatched by the time this is raised.
    """

    def __init__(
        self,
        status_code: int,
        message: str = "Query failed to return OK or CREATED",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class StatementError(TransactionError):
    """Raised when the server reports Cypher errors for the statements.

    The message is that of the first reported error; all of them are
    kept on ``errors``.
    """

    def __init__(
        self,
        message: str,
        code: str = "",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.errors = errors or []


class CommitFailure(TransactionError):
    """Raised when the commit call does not return 200.

    The server-side state is ambiguous; it may have partially committed.
    ``results`` holds what the statement request returned.
    """

    def __init__(
        self,
        status_code: int,
        results: list[dict[str, Any]] | None = None,
        message: str = "Transaction commit failed",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.results = results or []


class TransportException(TransactionError):
    """Raised when a lower-level error interrupts the exchange.

    Covers connection errors, timeouts, and malformed response bodies.
    The original exception is available as ``cause``.
    """

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Transaction failed: {cause}", cause=cause)


class UnsupportedPropertyTypeError(CypherLinkError, TypeError):
    """Raised when a value cannot be written as a Cypher property literal."""

    def __init__(self, key: str, value: Any) -> None:
        super().__init__(
            f"property type not supported: {key}={type(value).__name__}"
        )
        self.key = key
        self.value = value
