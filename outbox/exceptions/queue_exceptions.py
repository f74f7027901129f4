"""Exceptions raised by the outbound message queue and channel clients."""


class MessageQueueError(Exception):
    """Base exception for outbound message queue errors."""

    def __init__(self, message: str, message_id: str | None = None):
        """Initialize queue error.

        Args:
            message: Error message
            message_id: ID of the queued message involved, if any
        """
        self.message_id = message_id
        super().__init__(message)


class MessageValidationError(MessageQueueError):
    """Invalid arguments passed to enqueue. Nothing was persisted."""

    def __init__(self, message: str, field: str | None = None):
        """Initialize validation error.

        Args:
            message: Error message
            field: Name of the offending argument
        """
        self.field = field
        super().__init__(message)


class MessageNotFoundError(MessageQueueError):
    """No queued message exists with the given ID."""

    def __init__(self, message_id: str):
        """Initialize not found error.

        Args:
            message_id: ID of the message that was not found
        """
        super().__init__(
            message=f"Message with ID {message_id} not found",
            message_id=message_id,
        )


class TransientDeliveryError(MessageQueueError):
    """A delivery attempt failed but the message still has retries left."""

    def __init__(self, message_id: str, retry_count: int, reason: str):
        """Initialize transient delivery error.

        Args:
            message_id: ID of the message whose attempt failed
            retry_count: Retry count after this failure
            reason: Failure reason reported by the channel
        """
        self.retry_count = retry_count
        self.reason = reason
        super().__init__(
            message=f"Delivery of {message_id} failed (retry {retry_count}): {reason}",
            message_id=message_id,
        )


class PermanentDeliveryError(MessageQueueError):
    """A delivery attempt failed on the last allowed retry."""

    def __init__(self, message_id: str, attempts: int, reason: str):
        """Initialize permanent delivery error.

        Args:
            message_id: ID of the message that failed permanently
            attempts: Total number of attempts made
            reason: Failure reason reported by the channel
        """
        self.attempts = attempts
        self.reason = reason
        super().__init__(
            message=f"Failed after {attempts} attempts: {reason}",
            message_id=message_id,
        )


class MaintenanceError(MessageQueueError):
    """Failure during cleanup, administrative retry, or stuck-message recovery."""

    def __init__(self, operation: str, message: str, message_id: str | None = None):
        """Initialize maintenance error.

        Args:
            operation: Name of the maintenance operation that failed
            message: Error message
            message_id: ID of the message involved, if any
        """
        self.operation = operation
        super().__init__(message=f"{operation} failed: {message}", message_id=message_id)


class ConflictError(Exception):
    """Conflict error for operations that cannot be performed (409)."""

    def __init__(self, message: str, detail: str | None = None):
        """Initialize conflict error.

        Args:
            message: Error message
            detail: Additional details about the conflict
        """
        self.detail = detail
        super().__init__(message)


class ChannelError(Exception):
    """Base exception for messaging channel failures."""

    def __init__(self, message: str, status_code: int | None = None):
        """Initialize channel error.

        Args:
            message: Error message
            status_code: HTTP status code returned by the gateway, if any
        """
        self.status_code = status_code
        super().__init__(message)


class ChannelNotReadyError(ChannelError):
    """The channel is disconnected or still authenticating."""

    def __init__(self, message: str = "Messaging channel is not ready"):
        """Initialize not ready error."""
        super().__init__(message)


class ChannelSendError(ChannelError):
    """The channel rejected the message (4xx from the gateway)."""


class ChannelUnavailableError(ChannelError):
    """The gateway is unreachable, timed out, or returned a server error."""
