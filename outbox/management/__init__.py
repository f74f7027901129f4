"""Management commands for the outbox app."""
