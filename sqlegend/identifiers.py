"""
Tenant identifier generation and validation.

An identifier is the only credential a client holds, and it is
interpolated directly into a file name under the storage root.

Invariants:
    - Generated identifiers are 16 lowercase hex characters
    - is_valid_identifier accepts only non-empty hex strings
    - Every generated identifier passes is_valid_identifier

How to change safely:
    - Never widen IDENTIFIER_PATTERN to include '.', '/', '\\' or NUL
    - Never trim or normalise input before validating it
"""

from __future__ import annotations

import re
import secrets
from typing import Any

IDENTIFIER_BYTES = 8

IDENTIFIER_PATTERN = re.compile(r"[0-9a-fA-F]+")


def generate_identifier() -> str:
    """Return a fresh random tenant identifier.

    Issuing an identifier does not create a database; that happens on the
    first statement executed against it.
    """
    return secrets.token_hex(IDENTIFIER_BYTES)


def is_valid_identifier(value: Any) -> bool:
    """Check whether a client-supplied value is an acceptable identifier.

    Args:
        value: Raw value from the request body

    Returns:
        True if value is a non-empty string of hex digits
    """
    if not isinstance(value, str):
        return False
    # fullmatch, not match with '$': '$' also matches before a trailing newline
    return IDENTIFIER_PATTERN.fullmatch(value) is not None
