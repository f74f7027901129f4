"""Constants used throughout the notifier service."""

from datetime import timedelta

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"

# Message defaults
DEFAULT_PRIORITY = 0
DEFAULT_MAX_RETRIES = 3
MESSAGE_ID_PREFIX = "msg"
MAX_RECIPIENT_LENGTH = 64

# Delivery worker
DEFAULT_TICK_INTERVAL_MS = 1000
DEFAULT_BATCH_SIZE = 5
DEFAULT_RETRY_BACKOFF = timedelta(minutes=5)
WORKER_JOIN_TIMEOUT_SECONDS = 30.0
HEARTBEAT_INTERVAL_SECONDS = 60.0

# Retention
DEFAULT_RETENTION_WINDOW = timedelta(days=7)
DEFAULT_DEDUP_RETENTION_WINDOW = timedelta(hours=24)
DEFAULT_STUCK_PROCESSING_TIMEOUT = timedelta(minutes=10)
MAX_RETENTION_DAYS = 3650

# Channel status singleton row
CHANNEL_STATUS_ID = 1

# WhatsApp chat id suffix for individual contacts
WHATSAPP_CONTACT_SUFFIX = "@c.us"

INTERRUPTED_DELIVERY_ERROR = "Delivery interrupted before outcome was recorded"
