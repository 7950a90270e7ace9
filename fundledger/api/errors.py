"""API error handling and response helpers."""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fundledger.services.errors import LedgerError

logger = logging.getLogger(__name__)


def error_response(error: LedgerError) -> Dict[str, Any]:
    """Create a standardized error response."""
    return {"error": error.to_dict()}


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(status_code=exc.http_status, content=error_response(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Map ledger errors to JSON responses with their HTTP status."""
    app.add_exception_handler(LedgerError, ledger_error_handler)


__all__ = ["error_response", "register_error_handlers"]
