"""Unit tests for correlation ID context."""

import threading

from django.test import SimpleTestCase

from outbox.logging.context import (
    bind_correlation_id,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


class TestCorrelationContext(SimpleTestCase):
    """Tests for the thread-local correlation ID."""

    def tearDown(self):
        """Clear any correlation ID left behind."""
        clear_correlation_id()

    def test_bind_generates_prefixed_id(self):
        """Test that bind yields a prefixed ID and clears it afterwards."""
        with bind_correlation_id("tick") as correlation_id:
            self.assertTrue(correlation_id.startswith("tick-"))
            self.assertEqual(get_correlation_id(), correlation_id)

        self.assertIsNone(get_correlation_id())

    def test_bind_restores_previous_id(self):
        """Test that an enclosing request ID is restored."""
        set_correlation_id("request-123")

        with bind_correlation_id("sweep"):
            self.assertNotEqual(get_correlation_id(), "request-123")

        self.assertEqual(get_correlation_id(), "request-123")

    def test_ids_are_thread_local(self):
        """Test that another thread does not see this thread's ID."""
        set_correlation_id("main-thread")
        seen = []

        thread = threading.Thread(target=lambda: seen.append(get_correlation_id()))
        thread.start()
        thread.join()

        self.assertEqual(seen, [None])
