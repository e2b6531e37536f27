"""
Error Responses

Every failure a handler reports goes through one of these helpers, so the
log line and the response always agree:

- bad_request:    400, {"detail": ..., "errors": [{"field", "message"}]}
- not_found:      404, empty body
- internal_error: 500, the fixed GENERIC_ERROR_MESSAGE string
- repository_failure: picks one of the above (or 409) for a failed
  RepositoryResult

Details of a 500 are written to the log only, never to the response.
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import Response, status
from fastapi.responses import JSONResponse

from app.repositories import RepositoryResult

GENERIC_ERROR_MESSAGE = "Something went wrong ... again."


def format_validation_errors(errors: Sequence[dict[str, Any]]) -> list[dict[str, str]]:
    """
    Flatten Pydantic error dicts into {"field", "message"} pairs.

    The "body" prefix FastAPI adds to body locations is dropped:
        ("body", "title") -> "title"
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        formatted.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


def bad_request(
    log: logging.LoggerAdapter | logging.Logger,
    message: str,
    errors: list[dict[str, str]] | None = None,
) -> JSONResponse:
    """Log a warning and build a 400 response."""
    log.warning(message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": message, "errors": errors or []},
    )


def not_found(
    log: logging.LoggerAdapter | logging.Logger,
    message: str,
) -> Response:
    """Log a warning and build an empty 404 response."""
    log.warning(message)
    return Response(status_code=status.HTTP_404_NOT_FOUND)


def internal_error(
    log: logging.LoggerAdapter | logging.Logger,
    message: str,
) -> JSONResponse:
    """Log an error and build the generic 500 response."""
    log.error(message)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=GENERIC_ERROR_MESSAGE,
    )


def repository_failure(
    log: logging.LoggerAdapter | logging.Logger,
    result: RepositoryResult,
    message: str,
) -> Response:
    """
    Translate a failed repository result into a response.

    - CONFLICT:  409 with a short detail
    - NOT_FOUND: empty 404
    - anything else: generic 500
    """
    if result is RepositoryResult.CONFLICT:
        log.warning(f"{message}: conflicting data")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "The request conflicts with existing data"},
        )
    if result is RepositoryResult.NOT_FOUND:
        return not_found(log, f"{message}: record not found")
    return internal_error(log, f"{message}: {result.value}")
