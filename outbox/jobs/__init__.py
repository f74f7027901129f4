"""Background jobs for the outbox app."""
