"""Global exception handlers for the notifier service API."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from outbox.constants import REQUEST_ID_HEADER
from outbox.exceptions.queue_exceptions import (
    ConflictError,
    MessageNotFoundError,
    MessageValidationError,
)
from outbox.logging.context import get_correlation_id

logger = logging.getLogger(__name__)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Maps queue exceptions onto HTTP responses with the standard body
    ``{status, message, request_id, timestamp}`` and logs every failure.

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_correlation_id()

    # Let DRF handle its own exceptions first
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, MessageNotFoundError):
            response = Response(
                _create_error_response(
                    status_code=status.HTTP_404_NOT_FOUND,
                    message=str(exc),
                    request_id=request_id,
                ),
                status=status.HTTP_404_NOT_FOUND,
            )
        elif isinstance(exc, MessageValidationError):
            response_data = _create_error_response(
                status_code=status.HTTP_400_BAD_REQUEST,
                message=str(exc),
                request_id=request_id,
            )
            response_data["field"] = exc.field
            response = Response(response_data, status=status.HTTP_400_BAD_REQUEST)
        elif isinstance(exc, ConflictError):
            response_data = {
                "error": "conflict",
                "message": str(exc),
                "detail": exc.detail,
                "request_id": request_id,
                "timestamp": datetime.now(UTC).isoformat(),
            }
            response = Response(response_data, status=status.HTTP_409_CONFLICT)
        elif isinstance(exc, Http404):
            response = Response(
                _create_error_response(
                    status_code=status.HTTP_404_NOT_FOUND,
                    message="The requested resource was not found.",
                    request_id=request_id,
                ),
                status=status.HTTP_404_NOT_FOUND,
            )
        else:
            response = Response(
                _create_error_response(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    message="An internal server error occurred.",
                    request_id=request_id,
                ),
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    if request_id and response:
        response[REQUEST_ID_HEADER] = request_id

    _log_exception(exc, request, response)

    return response


def _create_error_response(
    status_code: int, message: str, request_id: str | None
) -> dict[str, Any]:
    """Create a standardized error response body.

    Args:
        status_code: The HTTP status code.
        message: The error message to return to the client.
        request_id: The request ID for tracing.

    Returns:
        Dictionary with standard error response format.
    """
    return {
        "status": status_code,
        "message": message,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _log_exception(
    exc: Exception,
    request: Any,
    response: Response | None,
) -> None:
    """Log exception details, as a warning for client errors.

    Args:
        exc: The exception that was raised.
        request: The HTTP request object.
        response: The response object (if available).
    """
    status_code = response.status_code if response else 500
    if isinstance(exc, APIException) or 400 <= status_code < 500:
        log_level = logging.WARNING if status_code < 500 else logging.ERROR
    else:
        log_level = logging.ERROR

    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {type(exc).__name__}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"

    logger.log(log_level, log_message)
