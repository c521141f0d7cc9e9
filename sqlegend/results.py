"""
Wire envelopes for gateway responses.

Every response body carries a boolean "success" marker. Successful
statements add "data"; failures add a human-readable "error".
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

from .dispatch import StatementOutcome
from .errors import GatewayError

INTERNAL_ERROR_MESSAGE = "Internal server error."


def success_envelope(outcome: StatementOutcome) -> dict[str, Any]:
    """Wrap a statement outcome in a success envelope."""
    return {"success": True, "data": outcome.to_json()}


def failure_envelope(error: BaseException) -> tuple[dict[str, Any], int]:
    """Map an error to a failure envelope and HTTP status.

    Gateway errors use their category message; StatementError's category
    message is the engine diagnostic. Anything else is reported as a fixed
    internal error so paths and tracebacks stay server-side.

    Args:
        error: Exception raised while handling the request

    Returns:
        Tuple of (envelope, status_code)
    """
    if isinstance(error, GatewayError):
        return {"success": False, "error": error.public_message}, error.status_code
    return {"success": False, "error": INTERNAL_ERROR_MESSAGE}, 500


def failure_response(error: BaseException) -> JSONResponse:
    body, status = failure_envelope(error)
    return JSONResponse(body, status_code=status)
