"""Background jobs for queue maintenance.

Retention sweeps run on the RQ scheduler, independently of the delivery
worker and on a much coarser interval than its ticks.
"""

from datetime import UTC, datetime, timedelta

from django.conf import settings

import django_rq
import structlog

logger = structlog.get_logger(__name__)

RETENTION_SWEEP_JOB_ID = "outbox-retention-sweep"


def run_retention_sweep(retention_days: int | None = None) -> dict[str, int]:
    """Delete terminal messages and expired dedup entries.

    Executed by RQ workers.

    Args:
        retention_days: Age in days after which terminal messages are deleted
            (defaults to OUTBOX_RETENTION_DAYS)

    Returns:
        Number of deleted rows per kind
    """
    from outbox.apps import get_message_queue_service  # noqa: PLC0415

    if retention_days is None:
        retention_days = settings.OUTBOX_RETENTION_DAYS

    result = get_message_queue_service().cleanup(timedelta(days=retention_days))
    return result.model_dump()


def schedule_retention_sweeps(
    interval_seconds: int | None = None,
    queue_name: str = "default",
) -> str:
    """Register the repeating retention sweep with the RQ scheduler.

    Any previously registered sweep is cancelled first, so calling this on
    every deploy leaves exactly one schedule.

    Args:
        interval_seconds: Seconds between sweeps (defaults to
            OUTBOX_CLEANUP_INTERVAL_SECONDS)
        queue_name: RQ queue the sweep jobs are enqueued on

    Returns:
        ID of the scheduled job
    """
    if interval_seconds is None:
        interval_seconds = settings.OUTBOX_CLEANUP_INTERVAL_SECONDS

    scheduler = django_rq.get_scheduler(queue_name)
    for job in scheduler.get_jobs():
        if job.id == RETENTION_SWEEP_JOB_ID:
            scheduler.cancel(job)

    scheduler.schedule(
        scheduled_time=datetime.now(UTC),
        func=run_retention_sweep,
        interval=interval_seconds,
        repeat=None,
        id=RETENTION_SWEEP_JOB_ID,
    )

    logger.info(
        "retention_sweep_scheduled",
        job_id=RETENTION_SWEEP_JOB_ID,
        interval_seconds=interval_seconds,
    )
    return RETENTION_SWEEP_JOB_ID
