"""Background delivery worker for the outbound message queue.

The worker runs in a daemon thread and calls ``tick()`` on a fixed
interval. Each tick claims a small batch of eligible messages and delivers
them one at a time through the channel client; every state change goes
through the repository's conditional transitions, so several workers (or a
worker plus a manual ``tick()`` call) never deliver the same message twice.
"""

import threading
import time
from dataclasses import dataclass
from datetime import timedelta

from django.db import close_old_connections, connection

import structlog

from outbox.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_STUCK_PROCESSING_TIMEOUT,
    DEFAULT_TICK_INTERVAL_MS,
    HEARTBEAT_INTERVAL_SECONDS,
    INTERRUPTED_DELIVERY_ERROR,
    WORKER_JOIN_TIMEOUT_SECONDS,
)
from outbox.enums import DeliveryOutcome, MessageStatus
from outbox.exceptions import (
    ChannelNotReadyError,
    MaintenanceError,
    PermanentDeliveryError,
    TransientDeliveryError,
)
from outbox.logging import bind_correlation_id
from outbox.models import OutboundMessage
from outbox.repositories import MessageRepository
from outbox.services.channel import ChannelClient
from outbox.services.retry_policy import RetryDecision, RetryPolicy
from outbox.services.status_tracker import StatusTracker
from outbox.signals import channel_ready

logger = structlog.get_logger(__name__)


@dataclass
class TickResult:
    """What a single tick did."""

    skipped: bool = False
    channel_ready: bool = True
    recovered: int = 0
    attempted: int = 0
    sent: int = 0
    rescheduled: int = 0
    failed: int = 0
    released: int = 0

    @property
    def idle(self) -> bool:
        """Whether the tick changed nothing."""
        return not (self.recovered or self.attempted or self.released)


class DeliveryWorker:
    """Single-flight delivery loop.

    A non-blocking lock guards ``tick()``: a tick that starts while another
    is still running returns a skipped result instead of waiting.
    """

    def __init__(
        self,
        repository: MessageRepository,
        status_tracker: StatusTracker,
        channel: ChannelClient,
        retry_policy: RetryPolicy,
        batch_size: int = DEFAULT_BATCH_SIZE,
        send_delay_ms: int = 0,
        stuck_timeout: timedelta = DEFAULT_STUCK_PROCESSING_TIMEOUT,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
    ) -> None:
        """Initialize the delivery worker.

        Args:
            repository: Message store
            status_tracker: Channel status and counters
            channel: Client used to deliver messages
            retry_policy: Decides the next state after each attempt
            batch_size: Maximum messages delivered per tick
            send_delay_ms: Pause between two sends within a tick
            stuck_timeout: Age after which a ``processing`` claim is recovered
            tick_interval_ms: Default milliseconds between ticks
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.repository = repository
        self.status_tracker = status_tracker
        self.channel = channel
        self.retry_policy = retry_policy
        self.batch_size = batch_size
        self.send_delay_ms = send_delay_ms
        self.stuck_timeout = stuck_timeout
        self.tick_interval_ms = tick_interval_ms

        self._tick_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._wake_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._state_lock = threading.Lock()
        self._last_heartbeat: float | None = None

    @property
    def is_running(self) -> bool:
        """Whether the worker thread is alive and has not been asked to stop."""
        thread = self._thread
        return (
            thread is not None
            and thread.is_alive()
            and not self._stop_event.is_set()
        )

    def start(self, tick_interval_ms: int | None = None) -> bool:
        """Start ticking in a background thread.

        Calling ``start`` while the worker is already running does nothing.

        Args:
            tick_interval_ms: Milliseconds between the start of two ticks
                (defaults to the interval given at construction)

        Returns:
            True if a new thread was started
        """
        if tick_interval_ms is None:
            tick_interval_ms = self.tick_interval_ms
        if tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")

        with self._state_lock:
            if self.is_running:
                logger.debug("delivery_worker_already_running")
                return False

            previous = self._thread
            if previous is not None and previous.is_alive():
                # A stop was requested but the last tick is still finishing
                previous.join(timeout=WORKER_JOIN_TIMEOUT_SECONDS)

            self.tick_interval_ms = tick_interval_ms
            self._stop_event.clear()
            self._wake_event.clear()
            channel_ready.connect(
                self._on_channel_ready,
                weak=False,
                dispatch_uid=self._dispatch_uid,
            )

            self._thread = threading.Thread(
                target=self._run_loop,
                name="DeliveryWorker",
                daemon=True,
            )
            self._thread.start()

        logger.info("delivery_worker_started", tick_interval_ms=tick_interval_ms)
        return True

    def stop(self, wait: bool = False, timeout: float | None = None) -> None:
        """Ask the worker to stop after the current tick.

        Args:
            wait: Block until the worker thread has exited
            timeout: Maximum seconds to wait (defaults to 30)
        """
        with self._state_lock:
            thread = self._thread
            if thread is None:
                return
            self._stop_event.set()
            self._wake_event.set()
            channel_ready.disconnect(dispatch_uid=self._dispatch_uid)

        if wait:
            thread.join(timeout=timeout or WORKER_JOIN_TIMEOUT_SECONDS)
            if thread.is_alive():
                logger.warning("delivery_worker_stop_timed_out", timeout=timeout)
            else:
                with self._state_lock:
                    if self._thread is thread:
                        self._thread = None

        logger.info("delivery_worker_stopped", waited=wait)

    @property
    def _dispatch_uid(self) -> str:
        return f"outbox.delivery_worker.{id(self)}"

    def _on_channel_ready(self, sender, **kwargs) -> None:
        self._wake_event.set()

    def _run_loop(self) -> None:
        """Tick until stopped, then release the thread's DB connection."""
        interval = self.tick_interval_ms / 1000
        try:
            while not self._stop_event.is_set():
                started = time.monotonic()
                close_old_connections()
                try:
                    self.tick()
                except Exception as e:
                    # Database outages and the like; retried next tick
                    logger.exception("delivery_tick_failed", error=str(e))

                remaining = interval - (time.monotonic() - started)
                if remaining > 0:
                    self._wake_event.wait(timeout=remaining)
                self._wake_event.clear()
        finally:
            connection.close()

    def tick(self) -> TickResult:
        """Run one delivery pass.

        Returns:
            TickResult describing what happened
        """
        if not self._tick_lock.acquire(blocking=False):
            logger.debug("delivery_tick_skipped")
            return TickResult(skipped=True)

        try:
            with bind_correlation_id("tick"):
                return self._run_tick()
        finally:
            self._tick_lock.release()

    def _run_tick(self) -> TickResult:
        result = TickResult()

        if not self.channel.poll_readiness():
            result.channel_ready = False
            return result

        self._heartbeat()

        result.recovered = self.recover_stuck_messages()

        batch = self.repository.select_eligible(limit=self.batch_size)
        for index, message in enumerate(batch):
            if index and self.send_delay_ms:
                time.sleep(self.send_delay_ms / 1000)
            self._deliver(message, result)

        if not result.idle:
            logger.info(
                "delivery_tick_completed",
                recovered=result.recovered,
                attempted=result.attempted,
                sent=result.sent,
                rescheduled=result.rescheduled,
                failed=result.failed,
                released=result.released,
            )
        return result

    def _heartbeat(self) -> None:
        """Record channel liveness at most once per heartbeat interval."""
        now = time.monotonic()
        if (
            self._last_heartbeat is not None
            and now - self._last_heartbeat < HEARTBEAT_INTERVAL_SECONDS
        ):
            return
        self.status_tracker.heartbeat()
        self._last_heartbeat = now

    def _deliver(self, message: OutboundMessage, result: TickResult) -> None:
        if not self.repository.mark_processing(message.id):
            logger.debug("message_claim_lost", message_id=message.id)
            return

        if not self.channel.is_ready():
            self._release(message, result)
            return

        try:
            self.channel.send(message.recipient, message.body)
        except ChannelNotReadyError:
            self._release(message, result)
            return
        except Exception as e:
            outcome = DeliveryOutcome.FAILURE
            error = str(e) or type(e).__name__
        else:
            outcome = DeliveryOutcome.SUCCESS
            error = None

        result.attempted += 1
        decision = self.retry_policy.decide(message, outcome, error=error)
        self._apply(message, decision, result)

    def _release(self, message: OutboundMessage, result: TickResult) -> None:
        self.repository.release_claim(message.id)
        result.released += 1
        logger.info("message_claim_released", message_id=message.id)

    def _apply(
        self,
        message: OutboundMessage,
        decision: RetryDecision,
        result: TickResult,
    ) -> None:
        """Persist a retry decision for a message this worker has claimed."""
        if decision.next_status == MessageStatus.SENT:
            if self.repository.mark_sent(message.id, decision.processed_at):
                self.status_tracker.increment_sent()
                result.sent += 1
                logger.info(
                    "message_sent",
                    message_id=message.id,
                    retry_count=message.retry_count,
                )
            else:
                self._log_discarded(message, decision)
            return

        if decision.next_status == MessageStatus.PENDING:
            error = TransientDeliveryError(
                message.id, decision.next_retry_count, decision.error_message
            )
            if self.repository.reschedule(
                message.id,
                retry_count=decision.next_retry_count,
                scheduled_at=decision.next_scheduled_at,
                error_message=decision.error_message,
            ):
                result.rescheduled += 1
                logger.warning(
                    "message_delivery_failed_retry_scheduled",
                    message_id=message.id,
                    retry_count=decision.next_retry_count,
                    max_retries=message.max_retries,
                    next_attempt_at=decision.next_scheduled_at.isoformat(),
                    error=str(error),
                )
            else:
                self._log_discarded(message, decision)
            return

        error = PermanentDeliveryError(
            message.id, message.retry_count + 1, decision.error_message
        )
        if self.repository.mark_failed(
            message.id, str(error), processed_at=decision.processed_at
        ):
            self.status_tracker.increment_errors()
            result.failed += 1
            logger.error(
                "message_delivery_failed_permanently",
                message_id=message.id,
                retry_count=message.retry_count,
                error=str(error),
            )
        else:
            self._log_discarded(message, decision)

    def _log_discarded(self, message: OutboundMessage, decision: RetryDecision) -> None:
        # The claim was taken back (stuck-claim recovery) while the send ran, so
        # the message may be delivered a second time.
        logger.warning(
            "message_outcome_discarded",
            message_id=message.id,
            outcome=decision.next_status.value,
            error=decision.error_message,
        )

    def recover_stuck_messages(self) -> int:
        """Treat long-running claims as failed attempts.

        A message stays ``processing`` only if a worker died between claiming
        and recording the outcome. Such claims older than the stuck timeout
        are run through the retry policy like any other failure.

        Returns:
            Number of messages recovered
        """
        try:
            stuck = self.repository.list_stuck_processing(self.stuck_timeout)
        except Exception as e:
            error = MaintenanceError("stuck_message_recovery", str(e))
            logger.error("stuck_message_recovery_failed", error=str(error))
            return 0

        recovered = 0
        for message in stuck:
            decision = self.retry_policy.decide(
                message, DeliveryOutcome.FAILURE, error=INTERRUPTED_DELIVERY_ERROR
            )
            try:
                if decision.next_status == MessageStatus.PENDING:
                    applied = self.repository.reschedule(
                        message.id,
                        retry_count=decision.next_retry_count,
                        scheduled_at=decision.next_scheduled_at,
                        error_message=decision.error_message,
                    )
                else:
                    applied = self.repository.mark_failed(
                        message.id,
                        str(
                            PermanentDeliveryError(
                                message.id,
                                message.retry_count + 1,
                                decision.error_message,
                            )
                        ),
                        processed_at=decision.processed_at,
                    )
                    if applied:
                        self.status_tracker.increment_errors()
            except Exception as e:
                error = MaintenanceError(
                    "stuck_message_recovery", str(e), message_id=message.id
                )
                logger.error(
                    "stuck_message_recovery_failed",
                    message_id=message.id,
                    error=str(error),
                )
                continue

            if applied:
                recovered += 1
                logger.warning(
                    "stuck_message_recovered",
                    message_id=message.id,
                    claimed_at=message.claimed_at.isoformat(),
                    next_status=decision.next_status.value,
                )
        return recovered
