"""
Error types for the SQLegend gateway.

This module defines every failure a request can end in:
- GatewayError: Base exception
- MalformedRequestError: Required request fields are missing
- InvalidIdentifierError: Identifier fails the hex alphabet check
- StoreUnavailableError: Tenant database cannot be opened or created
- StatementError: SQLite rejected or failed the statement

Invariants:
    - All errors inherit from GatewayError
    - public_message never contains a filesystem path or traceback
    - Only StatementError forwards engine text to the client
"""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base exception for all gateway errors.

    Attributes:
        message: Error message (server-side, may contain context)
        code: Error code for programmatic handling
        status_code: HTTP status the error maps to
        details: Additional error context, never sent to clients
    """

    status_code = 500
    public_message = "Internal server error."

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "GATEWAY_ERROR"
        self.details = details or {}


class MalformedRequestError(GatewayError):
    """Request body lacks a usable "id" or "sql" field."""

    status_code = 400
    public_message = 'Missing "id" or "sql" fields.'

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message, code="MALFORMED_REQUEST")


class InvalidIdentifierError(GatewayError):
    """Identifier contains characters outside the hex alphabet.

    Raised before any storage location is computed.
    """

    status_code = 403
    public_message = "Invalid ID format. Hex only."

    def __init__(self, identifier: Any) -> None:
        super().__init__(
            f"Rejected identifier {identifier!r}",
            code="INVALID_IDENTIFIER",
        )
        self.identifier = identifier


class StoreUnavailableError(GatewayError):
    """Tenant database could not be opened or created.

    Raised when:
    - The storage root is missing or unreachable
    - Permission is denied on the database file
    - The file exists but is not a database
    """

    status_code = 503
    public_message = "Database unavailable."

    def __init__(self, message: str, location: str | None = None) -> None:
        super().__init__(
            message,
            code="STORE_UNAVAILABLE",
            details={"location": location},
        )
        self.location = location


class StatementError(GatewayError):
    """SQLite rejected or failed the submitted statement.

    The engine diagnostic is the client-facing message.
    """

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message, code="STATEMENT_ERROR")

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return self.message
