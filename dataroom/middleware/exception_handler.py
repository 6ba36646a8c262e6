"""Exception handlers for structured error responses.

Every error leaves the API as ``{"error", "message", "details"}``.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import DataRoomError, DatabaseError, ErrorCode

logger = logging.getLogger(__name__)


async def data_room_exception_handler(request: Request, exc: DataRoomError) -> JSONResponse:
    """
    Handle custom exceptions and return structured JSON responses.

    Client errors are logged at WARNING, server errors at ERROR.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"DataRoomError: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures: log with the request path, answer 500 without internals."""
    logger.error(
        "Database error",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error": str(exc),
        },
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=DatabaseError().to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed request fields are a 400, in the same shape as other errors."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        extra={"path": request.url.path, "method": request.method, "errors": errors},
    )
    message = "; ".join(f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in errors)
    return JSONResponse(
        status_code=400,
        content={
            "error": ErrorCode.VALIDATION_ERROR.value,
            "message": message or "Invalid request",
            "details": {"errors": errors},
        },
    )
