"""
Tenant gateway: the request path from identifier to statement outcome.

Flow for a statement:
    fields check -> identifier validation -> store location
    -> open store (create if absent) -> dispatch -> close

Thread safety:
    A gateway holds only configuration. Each call opens its own
    connection and closes it before returning, so calls for the same or
    different tenants can run concurrently. Concurrent writers to one
    tenant are serialised by SQLite's own locking.

Example:
    >>> gateway = TenantGateway(StoreLocator("/var/lib/sqlegend"))
    >>> tenant_id = gateway.create_identifier()
    >>> gateway.execute(tenant_id, "CREATE TABLE users (name TEXT, weight INT);")
    MutationSummary(changes=0, last_insert_rowid=0)
"""

from __future__ import annotations

import logging
from typing import Any

from .dispatch import StatementOutcome, dispatch_statement
from .errors import InvalidIdentifierError, MalformedRequestError, StatementError
from .identifiers import generate_identifier, is_valid_identifier
from .store import StoreLocator, open_store

logger = logging.getLogger(__name__)


class TenantGateway:
    """Executes SQL statements against per-tenant SQLite stores.

    Attributes:
        locator: Resolves identifiers to database files
        busy_timeout_ms: SQLite busy timeout for every connection
        wal_mode: Whether connections switch stores to WAL mode
    """

    def __init__(
        self,
        locator: StoreLocator,
        busy_timeout_ms: int = 5000,
        wal_mode: bool = False,
    ) -> None:
        self.locator = locator
        self.busy_timeout_ms = busy_timeout_ms
        self.wal_mode = wal_mode

    def create_identifier(self) -> str:
        """Issue a new tenant identifier without creating its store."""
        identifier = generate_identifier()
        logger.info(f"[CREATE] New DB ID generated: {identifier}")
        return identifier

    def execute(self, identifier: Any, sql: Any) -> StatementOutcome:
        """Run one SQL statement against the tenant's store.

        Args:
            identifier: Tenant identifier from the request
            sql: Statement text from the request

        Returns:
            RowSet for reads, MutationSummary for writes

        Raises:
            MalformedRequestError: If identifier or sql is missing or empty
            InvalidIdentifierError: If identifier is not hex
            StoreUnavailableError: If the store cannot be opened
            StatementError: If SQLite rejects the statement
        """
        if not _is_present(identifier) or not _is_present(sql):
            raise MalformedRequestError()

        if not is_valid_identifier(identifier):
            raise InvalidIdentifierError(identifier)

        location = self.locator.locate(identifier)

        with open_store(location, self.busy_timeout_ms, self.wal_mode) as conn:
            try:
                return dispatch_statement(conn, sql)
            except StatementError as e:
                logger.error(f"[SQL ERROR] ID:{identifier} | SQL:{sql} | ERR:{e.message}")
                raise


def _is_present(value: Any) -> bool:
    return isinstance(value, str) and value != ""
