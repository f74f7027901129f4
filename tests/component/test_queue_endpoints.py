"""Component tests for the queue endpoints."""

import json
from datetime import timedelta
from unittest.mock import patch

from django.test import Client, TestCase
from django.utils import timezone

from outbox.models import OutboundMessage
from outbox.services import build_message_queue_service
from tests.factories import FakeChannelClient, create_message, days_ago

BASE_URL = "/api/v1/outbox/queue"


class QueueEndpointTestCase(TestCase):
    """Serve the views from a service on a fake channel."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()
        self.channel = FakeChannelClient(ready=True)
        self.service = build_message_queue_service(channel=self.channel)
        patcher = patch(
            "outbox.views.get_message_queue_service", return_value=self.service
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self.service.worker.stop, wait=True, timeout=5)

    def post_json(self, url, data):
        return self.client.post(url, json.dumps(data), content_type="application/json")


class TestEnqueueMessageEndpoint(QueueEndpointTestCase):
    """Tests for POST /queue/messages."""

    def test_enqueue_returns_202_with_id(self):
        """Test that a valid body is queued as pending."""
        response = self.post_json(
            f"{BASE_URL}/messages",
            {"phoneNumber": "970599123456", "message": "Card 1234 is ready"},
        )

        self.assertEqual(response.status_code, 202)
        data = response.json()
        self.assertTrue(data["message_id"].startswith("msg_"))
        self.assertEqual(data["message"], "Message added to queue successfully")
        stored = OutboundMessage.objects.get(pk=data["message_id"])
        self.assertEqual(stored.status, "pending")
        self.assertEqual(self.channel.sent, [])

    def test_enqueue_accepts_snake_case_and_options(self):
        """Test that priority, schedule and retries are stored."""
        scheduled_at = timezone.now() + timedelta(hours=1)

        response = self.post_json(
            f"{BASE_URL}/messages",
            {
                "phone_number": "970599123456",
                "message": "Reminder",
                "priority": 5,
                "scheduled_at": scheduled_at.isoformat(),
                "max_retries": 1,
            },
        )

        self.assertEqual(response.status_code, 202)
        stored = OutboundMessage.objects.get(pk=response.json()["message_id"])
        self.assertEqual(stored.priority, 5)
        self.assertEqual(stored.max_retries, 1)
        self.assertEqual(stored.scheduled_at, scheduled_at)

    def test_missing_fields_returns_400(self):
        """Test that a body without the message is rejected."""
        response = self.post_json(f"{BASE_URL}/messages", {"phoneNumber": "970599"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "bad_request")
        self.assertEqual(OutboundMessage.objects.count(), 0)

    def test_empty_recipient_returns_400(self):
        """Test that an empty phone number is rejected by the queue."""
        response = self.post_json(
            f"{BASE_URL}/messages", {"phoneNumber": "   ", "message": "Hi"}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "recipient")
        self.assertEqual(OutboundMessage.objects.count(), 0)


class TestMessageEndpoints(QueueEndpointTestCase):
    """Tests for message detail and retry."""

    def test_message_detail(self):
        """Test that a stored message is returned."""
        message = create_message(priority=2)

        response = self.client.get(f"{BASE_URL}/messages/{message.id}")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["id"], message.id)
        self.assertEqual(data["status"], "pending")
        self.assertEqual(data["priority"], 2)

    def test_unknown_message_returns_404(self):
        """Test that an unknown ID returns 404."""
        response = self.client.get(f"{BASE_URL}/messages/msg_0_missing")

        self.assertEqual(response.status_code, 404)
        self.assertIn("msg_0_missing", response.json()["message"])

    def test_retry_failed_message(self):
        """Test that a failed message is requeued."""
        message = create_message(status="failed", retry_count=3, error_message="boom")

        response = self.client.post(f"{BASE_URL}/messages/{message.id}/retry")

        self.assertEqual(response.status_code, 202)
        stored = OutboundMessage.objects.get(pk=message.id)
        self.assertEqual(stored.status, "pending")
        self.assertEqual(stored.retry_count, 0)

    def test_retry_sent_message_returns_409(self):
        """Test that only failed messages can be retried."""
        message = create_message(status="sent")

        response = self.client.post(f"{BASE_URL}/messages/{message.id}/retry")

        self.assertEqual(response.status_code, 409)
        self.assertEqual(OutboundMessage.objects.get(pk=message.id).status, "sent")

    def test_retry_unknown_message_returns_404(self):
        """Test that retrying an unknown ID returns 404."""
        response = self.client.post(f"{BASE_URL}/messages/msg_0_missing/retry")

        self.assertEqual(response.status_code, 404)


class TestQueueOverviewEndpoints(QueueEndpointTestCase):
    """Tests for overview, failed list and cleanup."""

    def test_overview_reports_channel_and_counts(self):
        """Test that the overview combines channel status and statistics."""
        create_message()
        create_message(status="sent")
        self.channel.set_ready(False)
        self.channel.set_ready(True)

        response = self.client.get(BASE_URL)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data["channel"]["is_ready"])
        self.assertEqual(data["channel"]["pending_count"], 1)
        self.assertEqual(data["messages"]["total"], 2)
        self.assertEqual(data["messages"]["sent"], 1)
        self.assertFalse(data["worker_running"])

    def test_failed_list(self):
        """Test that failed messages are listed."""
        failed = create_message(status="failed", error_message="boom")
        create_message(status="pending")

        response = self.client.get(f"{BASE_URL}/failed")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["count"], 1)
        self.assertEqual(data["results"][0]["id"], failed.id)
        self.assertEqual(data["results"][0]["error_message"], "boom")

    def test_cleanup_default_window(self):
        """Test that cleanup removes terminal messages older than 7 days."""
        create_message(status="sent", processed_at=days_ago(8))
        create_message(status="failed", processed_at=days_ago(3))
        create_message(status="pending", created_at=days_ago(30))

        response = self.post_json(f"{BASE_URL}/cleanup", {})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["deleted_messages"], 1)
        self.assertEqual(data["retention_days"], 7)
        self.assertEqual(OutboundMessage.objects.count(), 2)

    def test_cleanup_rejects_negative_window(self):
        """Test that a negative retention is a bad request."""
        response = self.post_json(f"{BASE_URL}/cleanup", {"retentionDays": -1})

        self.assertEqual(response.status_code, 400)

    def test_cleanup_rejects_oversized_window(self):
        """Test that a window too large for a date offset is a bad request."""
        create_message(status="sent", processed_at=days_ago(8))

        response = self.post_json(
            f"{BASE_URL}/cleanup", {"retentionDays": 1_000_000_000}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "bad_request")
        self.assertEqual(OutboundMessage.objects.count(), 1)

    def test_cleanup_rejects_non_integer_window(self):
        """Test that a string or boolean retention is a bad request."""
        for value in ("7", True):
            with self.subTest(value=value):
                response = self.post_json(
                    f"{BASE_URL}/cleanup", {"retention_days": value}
                )

                self.assertEqual(response.status_code, 400)

    def test_cleanup_explicit_window(self):
        """Test that retention_days overrides the default window."""
        create_message(status="sent", processed_at=days_ago(3))

        response = self.post_json(f"{BASE_URL}/cleanup", {"retention_days": 2})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["retention_days"], 2)
        self.assertEqual(OutboundMessage.objects.count(), 0)


class TestProcessingControlEndpoint(QueueEndpointTestCase):
    """Tests for POST /queue/processing."""

    def test_start_and_stop(self):
        """Test that the worker can be started and stopped over HTTP."""
        self.channel._ready = False

        response = self.post_json(
            f"{BASE_URL}/processing", {"action": "start", "tickIntervalMs": 200}
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["worker_running"])
        self.assertEqual(response.json()["tick_interval_ms"], 200)

        response = self.post_json(f"{BASE_URL}/processing", {"action": "stop"})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["worker_running"])

    def test_invalid_action_returns_400(self):
        """Test that an unknown action is rejected."""
        response = self.post_json(f"{BASE_URL}/processing", {"action": "pause"})

        self.assertEqual(response.status_code, 400)
