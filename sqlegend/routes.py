"""
API routes for the SQLegend gateway.

Two endpoints make up the protocol:
- POST /new: issue a tenant identifier
- POST /api: execute one SQL statement for a tenant

Route handlers are plain functions: SQLite calls block, so FastAPI runs
them in its worker thread pool.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .gateway import TenantGateway
from .results import success_envelope

logger = logging.getLogger(__name__)

router = APIRouter(tags=["SQLegend"])


# --- Request/Response Models ---


class ExecuteRequest(BaseModel):
    """Request to execute a statement.

    Fields are untyped so that missing or mistyped values reach the
    gateway and produce the protocol's own error envelope.
    """

    id: Any = Field(None, description="Tenant identifier (hex)")
    sql: Any = Field(None, description="One SQL statement")


class CreateIdentifierResponse(BaseModel):
    """Response to an identifier request."""

    success: bool = True
    id: str
    message: str = "Database authorized. Use this ID for all requests."


# --- Dependencies ---


def get_gateway(request: Request) -> TenantGateway:
    """Get tenant gateway from app state."""
    return request.app.state.gateway


# --- Routes ---


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
@router.get("/docs", response_class=HTMLResponse, include_in_schema=False)
def docs_page(request: Request):
    """Serve the documentation page with its live console."""
    return HTMLResponse(request.app.state.docs_html)


@router.post("/new", response_model=CreateIdentifierResponse)
def create_identifier(gateway: TenantGateway = Depends(get_gateway)):
    """
    Issue a new database identifier.

    The database itself is created on the first statement sent with
    this identifier.
    """
    return CreateIdentifierResponse(id=gateway.create_identifier())


@router.post("/api")
def execute_statement(
    body: ExecuteRequest,
    gateway: TenantGateway = Depends(get_gateway),
):
    """
    Execute one SQL statement against the caller's database.

    Read statements return their rows; all other statements return
    {"changes", "lastInsertRowid"}. Failures are turned into envelopes
    by the application's exception handlers.
    """
    outcome = gateway.execute(body.id, body.sql)
    return success_envelope(outcome)
