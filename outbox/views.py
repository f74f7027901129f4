"""API views for the outbox application.

Authentication is enforced at the deployment edge; these views only
validate input and translate between HTTP and ``MessageQueueService``.
"""

from datetime import timedelta

from django.conf import settings

import structlog
from pydantic import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from outbox.apps import get_message_queue_service
from outbox.exceptions import ConflictError
from outbox.schemas.message import (
    CleanupRequest,
    EnqueueMessageRequest,
    EnqueueMessageResponse,
    MessageDetail,
    ProcessingAction,
    ProcessingControlRequest,
    QueueOverviewResponse,
)

logger = structlog.get_logger(__name__)


def _bad_request(e: ValidationError, message: str = "Invalid request parameters"):
    return Response(
        {
            "error": "bad_request",
            "message": message,
            "errors": e.errors(include_url=False, include_context=False),
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


class LivenessCheckView(APIView):
    """Liveness probe endpoint for Kubernetes.

    Returns 200 if the service is alive and running.
    This should not check external dependencies.
    """

    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for liveness check."""
        service = get_message_queue_service()
        liveness = service.health.get_liveness_status(service.is_processing)
        return Response(liveness.model_dump(), status=status.HTTP_200_OK)


class ReadinessCheckView(APIView):
    """Readiness probe endpoint for Kubernetes.

    Returns 200 while the database is reachable, reporting a disconnected
    channel as degraded. Returns 503 when the database is unavailable.
    """

    permission_classes = (AllowAny,)

    def get(self, _request):
        """Handle GET request for readiness check."""
        readiness = get_message_queue_service().health.get_readiness_status()
        return Response(
            readiness.model_dump(),
            status=(
                status.HTTP_200_OK
                if readiness.ready
                else status.HTTP_503_SERVICE_UNAVAILABLE
            ),
        )


class QueueOverviewView(APIView):
    """Channel status and message statistics.

    Endpoint: GET /queue
    """

    def get(self, _request):
        """Return the dashboard overview of the queue.

        Returns:
            200 with QueueOverviewResponse
        """
        service = get_message_queue_service()
        overview = QueueOverviewResponse(
            channel=service.get_status(),
            messages=service.get_message_stats(),
            worker_running=service.is_processing,
        )
        return Response(overview.model_dump(mode="json"), status=status.HTTP_200_OK)


class EnqueueMessageView(APIView):
    """Add a message to the outbound queue.

    Endpoint: POST /queue/messages
    """

    def post(self, request):
        """Queue a message for delivery.

        Args:
            request: HTTP request with EnqueueMessageRequest body

        Returns:
            202 Accepted with EnqueueMessageResponse
            400 Bad Request if validation fails
        """
        try:
            enqueue_request = EnqueueMessageRequest(**request.data)
        except ValidationError as e:
            logger.warning(
                "Invalid request body for enqueue message",
                validation_errors=e.errors(include_url=False, include_context=False),
            )
            return _bad_request(e)

        # MessageValidationError is mapped to 400 by the exception handler
        message_id = get_message_queue_service().enqueue(
            enqueue_request.phone_number,
            enqueue_request.message,
            priority=enqueue_request.priority,
            scheduled_at=enqueue_request.scheduled_at,
            max_retries=enqueue_request.max_retries,
        )

        return Response(
            EnqueueMessageResponse(message_id=message_id).model_dump(),
            status=status.HTTP_202_ACCEPTED,
        )


class MessageDetailView(APIView):
    """Delivery state of a single message.

    Endpoint: GET /queue/messages/{message_id}
    """

    def get(self, _request, message_id):
        """Return a queued message.

        Returns:
            200 with MessageDetail
            404 if the message does not exist
        """
        message = get_message_queue_service().get_message(message_id)
        detail = MessageDetail.model_validate(message)
        return Response(detail.model_dump(mode="json"), status=status.HTTP_200_OK)


class RetryMessageView(APIView):
    """Requeue a permanently failed message.

    Endpoint: POST /queue/messages/{message_id}/retry
    """

    def post(self, _request, message_id):
        """Retry a failed message.

        Returns:
            202: Message requeued
            404: Message not found
            409: Message is not failed
        """
        logger.info("Retry message request received", message_id=message_id)

        if not get_message_queue_service().retry(message_id):
            raise ConflictError(
                message=f"Message {message_id} cannot be retried",
                detail="Only failed messages can be retried",
            )

        return Response(
            {"message_id": message_id, "message": "Message requeued for delivery"},
            status=status.HTTP_202_ACCEPTED,
        )


class FailedMessageListView(APIView):
    """Permanently failed messages, oldest first.

    Endpoint: GET /queue/failed
    """

    def get(self, _request):
        """Return failed messages."""
        failed = get_message_queue_service().list_failed()
        return Response(
            {
                "count": len(failed),
                "results": [message.model_dump() for message in failed],
            },
            status=status.HTTP_200_OK,
        )


class CleanupView(APIView):
    """Run a retention sweep on demand.

    Endpoint: POST /queue/cleanup
    """

    def post(self, request):
        """Delete terminal messages older than ``retention_days`` (default 7).

        Returns:
            200 with the number of deleted rows
            400 if retention_days is not an integer between 0 and 3650
        """
        try:
            cleanup = CleanupRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        retention_days = cleanup.retention_days
        if retention_days is None:
            retention_days = settings.OUTBOX_RETENTION_DAYS

        result = get_message_queue_service().cleanup(timedelta(days=retention_days))
        response_data = result.model_dump()
        response_data["retention_days"] = retention_days
        return Response(response_data, status=status.HTTP_200_OK)


class ProcessingControlView(APIView):
    """Start or stop the delivery worker in this process.

    Endpoint: POST /queue/processing
    """

    def post(self, request):
        """Apply a start or stop action.

        Returns:
            200 with the worker state after the action
            400 if the body is invalid
        """
        try:
            control = ProcessingControlRequest(**request.data)
        except ValidationError as e:
            return _bad_request(e)

        service = get_message_queue_service()
        if control.action == ProcessingAction.START:
            started = service.start_processing(control.tick_interval_ms)
            logger.info("Processing start requested", started=started)
        else:
            service.stop_processing()
            logger.info("Processing stop requested")

        return Response(
            {
                "action": control.action,
                "worker_running": service.is_processing,
                "tick_interval_ms": service.worker.tick_interval_ms,
            },
            status=status.HTTP_200_OK,
        )
