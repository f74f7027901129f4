"""Unit tests for maintenance jobs."""

from unittest.mock import MagicMock, patch

from django.test import TestCase, override_settings

from outbox.jobs.maintenance_jobs import (
    RETENTION_SWEEP_JOB_ID,
    run_retention_sweep,
    schedule_retention_sweeps,
)
from outbox.models import OutboundMessage
from outbox.services import build_message_queue_service
from tests.factories import FakeChannelClient, create_message, days_ago


class TestRunRetentionSweep(TestCase):
    """Tests for run_retention_sweep."""

    def setUp(self):
        """Point the job at a service on a fake channel."""
        self.service = build_message_queue_service(channel=FakeChannelClient())
        patcher = patch(
            "outbox.apps.get_message_queue_service", return_value=self.service
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    @override_settings(OUTBOX_RETENTION_DAYS=7)
    def test_uses_configured_retention(self):
        """Test that the default window comes from settings."""
        create_message(status="failed", processed_at=days_ago(10))
        create_message(status="sent", processed_at=days_ago(3))

        result = run_retention_sweep()

        self.assertEqual(result["deleted_messages"], 1)
        self.assertEqual(OutboundMessage.objects.count(), 1)

    def test_explicit_retention_days(self):
        """Test that an explicit window overrides the setting."""
        create_message(status="sent", processed_at=days_ago(3))

        result = run_retention_sweep(retention_days=1)

        self.assertEqual(result["deleted_messages"], 1)


class TestScheduleRetentionSweeps(TestCase):
    """Tests for schedule_retention_sweeps."""

    @patch("outbox.jobs.maintenance_jobs.django_rq.get_scheduler")
    def test_schedules_repeating_job(self, mock_get_scheduler):
        """Test that the sweep is scheduled to repeat forever."""
        scheduler = MagicMock()
        scheduler.get_jobs.return_value = []
        mock_get_scheduler.return_value = scheduler

        job_id = schedule_retention_sweeps(interval_seconds=600)

        self.assertEqual(job_id, RETENTION_SWEEP_JOB_ID)
        mock_get_scheduler.assert_called_once_with("default")
        kwargs = scheduler.schedule.call_args.kwargs
        self.assertIs(kwargs["func"], run_retention_sweep)
        self.assertEqual(kwargs["interval"], 600)
        self.assertIsNone(kwargs["repeat"])
        self.assertEqual(kwargs["id"], RETENTION_SWEEP_JOB_ID)

    @patch("outbox.jobs.maintenance_jobs.django_rq.get_scheduler")
    def test_replaces_existing_schedule(self, mock_get_scheduler):
        """Test that a previous sweep schedule is cancelled."""
        existing = MagicMock(id=RETENTION_SWEEP_JOB_ID)
        unrelated = MagicMock(id="other-job")
        scheduler = MagicMock()
        scheduler.get_jobs.return_value = [existing, unrelated]
        mock_get_scheduler.return_value = scheduler

        schedule_retention_sweeps()

        scheduler.cancel.assert_called_once_with(existing)
        self.assertEqual(scheduler.schedule.call_args.kwargs["interval"], 3600)
