"""
Per-tenant SQLite store location and connection lifecycle.

This module maps tenant identifiers to database files under a single
storage root and opens short-lived connections to them.

Invariants:
    - One SQLite file per tenant identifier, named "<identifier>.db"
    - Every database file is a direct child of the storage root
    - Opening a store creates it if absent; absence is never an error
    - Every opened connection is closed exactly once

How to change safely:
    - Keep validation ahead of path construction in locate()
    - Do not cache or pool connections between requests
    - Test with a read-only storage root before changing error mapping
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .errors import InvalidIdentifierError, StoreUnavailableError
from .identifiers import is_valid_identifier

logger = logging.getLogger(__name__)

STORE_SUFFIX = ".db"


class StoreLocator:
    """Resolves tenant identifiers to database files under a storage root.

    The storage root is fixed at construction. It is resolved to an
    absolute path once so that later changes to the working directory
    cannot move tenant stores.

    Example:
        >>> locator = StoreLocator("/var/lib/sqlegend")
        >>> locator.locate("3f9a0c1d2e4b5a6f")
        PosixPath('/var/lib/sqlegend/3f9a0c1d2e4b5a6f.db')
    """

    def __init__(self, storage_root: str | Path) -> None:
        self.storage_root = Path(storage_root).resolve()

    def ensure_root(self) -> None:
        """Create the storage root if it does not exist yet."""
        if self.storage_root.is_dir():
            return
        self.storage_root.mkdir(parents=True, exist_ok=True)
        logger.info(f"[Init] Data directory created at: {self.storage_root}")

    def locate(self, identifier: str) -> Path:
        """Get the database file path for a tenant.

        Args:
            identifier: Tenant identifier that passed is_valid_identifier

        Returns:
            Path of the tenant database, directly under the storage root

        Raises:
            InvalidIdentifierError: If identifier is not a valid identifier
        """
        if not is_valid_identifier(identifier):
            raise InvalidIdentifierError(identifier)

        path = self.storage_root / f"{identifier}{STORE_SUFFIX}"
        if path.parent != self.storage_root:
            raise InvalidIdentifierError(identifier)
        return path


@contextmanager
def open_store(
    location: Path,
    busy_timeout_ms: int = 5000,
    wal_mode: bool = False,
) -> Iterator[sqlite3.Connection]:
    """Open a tenant database, creating it if it does not exist.

    The connection runs in autocommit mode, so each statement is its own
    transaction. It is closed when the block exits, however it exits.

    Args:
        location: Database file path from StoreLocator.locate
        busy_timeout_ms: How long to wait on a locked database
        wal_mode: Switch the database to WAL journal mode

    Yields:
        SQLite connection

    Raises:
        StoreUnavailableError: If the file cannot be opened or created
    """
    try:
        conn = sqlite3.connect(
            str(location),
            timeout=busy_timeout_ms / 1000.0,
            isolation_level=None,
        )
    except sqlite3.Error as e:
        logger.error(f"Cannot open store {location}: {e}")
        raise StoreUnavailableError(str(e), location=str(location)) from e

    try:
        try:
            conn.execute(f"PRAGMA busy_timeout = {int(busy_timeout_ms)}")
            # Reads the header: unreadable or non-database files fail here
            conn.execute("PRAGMA schema_version").fetchone()
            if wal_mode:
                conn.execute("PRAGMA journal_mode = WAL")
        except sqlite3.Error as e:
            logger.error(f"Cannot configure store {location}: {e}")
            raise StoreUnavailableError(str(e), location=str(location)) from e

        yield conn
    finally:
        conn.close()
