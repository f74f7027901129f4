"""Test-specific Django settings."""

from django.db.models.signals import class_prepared

from .settings import *

# Use SQLite for faster tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Disable debug for tests
DEBUG = False

# Use a simple password hasher for speed
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]


# Use local cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Never start the delivery worker thread during tests
OUTBOX_AUTOSTART = False
OUTBOX_SEND_DELAY_MS = 0

WHATSAPP_GATEWAY_URL = "http://gateway.test/api"
WHATSAPP_GATEWAY_TOKEN = "test-token"

# Suppress logs during tests (only show CRITICAL errors)
LOGGING_CONFIG = "logging.config.dictConfig"
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "root": {
        "handlers": ["null"],
        "level": "CRITICAL",
    },
    "loggers": {
        "django": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
        "outbox": {
            "handlers": ["null"],
            "level": "CRITICAL",
            "propagate": False,
        },
    },
}

# Test-specific settings
TEST_MODE = True

# The queue tables are provisioned outside of Django (managed=False), but
# tests need them created in the in-memory database.


def make_unmanaged_models_managed(sender, **_kwargs):
    """Signal handler to make unmanaged models managed during tests.

    This fires when each model class is prepared by Django.
    """
    if not sender._meta.managed:
        sender._meta.managed = True


# Connect the signal - this will fire for each model as it's loaded
class_prepared.connect(make_unmanaged_models_managed)
