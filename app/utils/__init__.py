"""
Utilities Package

Helpers shared by the routers and the application-level exception handlers.
"""

from app.utils.responses import (
    GENERIC_ERROR_MESSAGE,
    bad_request,
    format_validation_errors,
    internal_error,
    not_found,
    repository_failure,
)

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "bad_request",
    "format_validation_errors",
    "internal_error",
    "not_found",
    "repository_failure",
]
