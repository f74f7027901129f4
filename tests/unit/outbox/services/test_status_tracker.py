"""Unit tests for StatusTracker."""

from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from outbox.models import ChannelStatus
from outbox.services.status_tracker import StatusTracker
from tests.factories import create_message


class TestStatusTracker(TestCase):
    """Tests for StatusTracker."""

    def setUp(self):
        """Set up test fixtures."""
        self.tracker = StatusTracker()

    def test_status_row_is_created_on_first_use(self):
        """Test that a fresh database reports a not-ready channel."""
        status = self.tracker.get_status()

        self.assertFalse(status.is_ready)
        self.assertEqual(status.message_count, 0)
        self.assertEqual(status.error_count, 0)
        self.assertEqual(ChannelStatus.objects.count(), 1)

    def test_set_ready_updates_flag_and_heartbeat(self):
        """Test that set_ready records the transition time."""
        before = timezone.now()

        self.tracker.set_ready(True)

        status = self.tracker.get_status()
        self.assertTrue(status.is_ready)
        self.assertGreaterEqual(status.last_heartbeat, before)

        self.tracker.set_ready(False)
        self.assertFalse(self.tracker.is_ready())

    def test_heartbeat_keeps_readiness(self):
        """Test that heartbeat only touches last_heartbeat."""
        self.tracker.set_ready(True)
        ChannelStatus.objects.update(last_heartbeat=timezone.now() - timedelta(hours=1))

        self.tracker.heartbeat()

        status = ChannelStatus.load()
        self.assertTrue(status.is_ready)
        self.assertGreater(status.last_heartbeat, timezone.now() - timedelta(minutes=1))

    def test_counters_increment_atomically(self):
        """Test that sent and error counters accumulate."""
        for _ in range(3):
            self.tracker.increment_sent()
        self.tracker.increment_errors()

        status = self.tracker.get_status()
        self.assertEqual(status.message_count, 3)
        self.assertEqual(status.error_count, 1)

    def test_pending_count_is_live(self):
        """Test that pending_count reflects the queue at read time."""
        create_message()
        create_message(scheduled_at=timezone.now() + timedelta(days=1))
        create_message(status="sent")

        self.assertEqual(self.tracker.get_status().pending_count, 2)

        create_message()
        self.assertEqual(self.tracker.get_status().pending_count, 3)

    def test_singleton_row_is_reused(self):
        """Test that every update targets the same row."""
        self.tracker.set_ready(True)
        self.tracker.increment_sent()
        self.tracker.heartbeat()

        self.assertEqual(ChannelStatus.objects.count(), 1)
        self.assertEqual(ChannelStatus.objects.get().pk, 1)
