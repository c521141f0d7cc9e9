"""
SQLegend - anonymous per-tenant SQLite over HTTP.

Clients get an opaque hex identifier from POST /new and send single SQL
statements with it to POST /api. Each identifier owns one SQLite file
under the storage root, created on first use.

Usage:
    uvicorn sqlegend.app:app --port 3000
"""

__version__ = "1.0.0"

from .dispatch import MutationSummary, RowSet, StatementOutcome, dispatch_statement
from .errors import (
    GatewayError,
    InvalidIdentifierError,
    MalformedRequestError,
    StatementError,
    StoreUnavailableError,
)
from .gateway import TenantGateway
from .identifiers import generate_identifier, is_valid_identifier
from .store import StoreLocator, open_store

__all__ = [
    "GatewayError",
    "InvalidIdentifierError",
    "MalformedRequestError",
    "MutationSummary",
    "RowSet",
    "StatementError",
    "StatementOutcome",
    "StoreLocator",
    "StoreUnavailableError",
    "TenantGateway",
    "dispatch_statement",
    "generate_identifier",
    "is_valid_identifier",
    "open_store",
]
