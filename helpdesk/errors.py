"""Centralized API error types and the standard error schema.

Provides:
- HelpdeskError and its subclasses, raised by services and dependencies
- error_payload(...) / make_validation_error_response(...) -> dict payloads used by exception handlers
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder


class HelpdeskError(Exception):
    """Base error carrying the HTTP status and machine-readable code it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class Unauthenticated(HelpdeskError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Unauthorized"


class InvalidCredentials(Unauthenticated):
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class PermissionDenied(HelpdeskError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Permission denied"


class NotFound(HelpdeskError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "ticket_not_found"
    default_message = "Ticket not found"


class ValidationError(HelpdeskError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid request"


class UpstreamFailure(HelpdeskError):
    """Database or object-store failure; the message never carries upstream detail."""

    code = "upstream_failure"
    default_message = "Internal server error"


def error_payload(code: str, message: str, details: Optional[Any] = None) -> dict:
    payload: dict = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return jsonable_encoder(payload)


def make_validation_error_response(errors: Any) -> dict:
    # Use FastAPI's jsonable_encoder to safely convert potential exception objects
    return error_payload("validation_error", "Validation error", errors)


__all__ = [
    "HelpdeskError",
    "Unauthenticated",
    "InvalidCredentials",
    "PermissionDenied",
    "NotFound",
    "ValidationError",
    "UpstreamFailure",
    "error_payload",
    "make_validation_error_response",
]
