"""Request ID middleware for log correlation."""

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from outbox.constants import REQUEST_ID_HEADER
from outbox.logging.context import clear_correlation_id, set_correlation_id


class RequestIDMiddleware:
    """Propagate or generate an ``X-Request-ID`` for every request.

    The ID becomes the thread's correlation ID for the duration of the
    request, is exposed as ``request.request_id``, and is echoed back in the
    response headers.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request with a bound correlation ID.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response with request ID header added.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        set_correlation_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_correlation_id()
