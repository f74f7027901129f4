"""URL routing configuration for outbox application."""

from django.urls import path

from .views import (
    CleanupView,
    EnqueueMessageView,
    FailedMessageListView,
    LivenessCheckView,
    MessageDetailView,
    ProcessingControlView,
    QueueOverviewView,
    ReadinessCheckView,
    RetryMessageView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Queue endpoints
    path("queue", QueueOverviewView.as_view(), name="queue-overview"),
    path("queue/messages", EnqueueMessageView.as_view(), name="enqueue-message"),
    path("queue/failed", FailedMessageListView.as_view(), name="failed-messages"),
    path("queue/cleanup", CleanupView.as_view(), name="queue-cleanup"),
    path(
        "queue/processing",
        ProcessingControlView.as_view(),
        name="queue-processing",
    ),
    # Message endpoints (specific routes before generic)
    path(
        "queue/messages/<str:message_id>/retry",
        RetryMessageView.as_view(),
        name="retry-message",
    ),
    path(
        "queue/messages/<str:message_id>",
        MessageDetailView.as_view(),
        name="message-detail",
    ),
]
