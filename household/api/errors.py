"""API error handling and response helpers."""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from household.services.errors import HouseholdError

logger = logging.getLogger(__name__)


def error_response(error: HouseholdError) -> Dict[str, Any]:
    """Create a standardized error response."""
    return {"error": error.to_dict()}


async def household_error_handler(request: Request, exc: HouseholdError) -> JSONResponse:
    """Render domain errors as JSON with the error's HTTP status."""
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.http_status, exc.code)
    return JSONResponse(status_code=exc.http_status, content=error_response(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HouseholdError, household_error_handler)


__all__ = ["error_response", "household_error_handler", "register_error_handlers"]
