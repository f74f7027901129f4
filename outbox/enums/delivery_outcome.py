"""Outcome of a single delivery attempt."""

from enum import Enum


class DeliveryOutcome(str, Enum):
    """Result reported by the channel client for one send attempt."""

    SUCCESS = "success"
    FAILURE = "failure"
