"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict, Optional

from models.response import ApiResponse

JSON_HEADERS = {"Content-Type": "application/json"}


class AppError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str, status_code: int = 400, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class BadRequestError(AppError):
    """Raised when a request body cannot be parsed or validated."""

    def __init__(self, message: str = "Invalid request", details: Optional[Any] = None):
        super().__init__(message, status_code=400, details=details)


class NotFoundError(AppError):
    """Raised when a requested resource is missing."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=422)


def json_response(status: int, body: Any) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": dict(JSON_HEADERS),
        "body": body if isinstance(body, str) else json.dumps(body),
    }


def error_response(
    status: int,
    message: str,
    error: Optional[Any] = None,
    correlation_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Build an error response with the shared ApiResponse envelope."""
    payload = ApiResponse(
        message=message,
        status="error",
        error=error,
        correlation_id=correlation_id,
    )
    return json_response(status, payload.model_dump_json(exclude_none=True))


def to_response(error: AppError, correlation_id: Optional[str] = None) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    return error_response(
        error.status_code, error.message, error.details, correlation_id=correlation_id
    )
