"""Django settings for the notifier service.

The notifier service owns the reseller outbound message queue: a durable
store of WhatsApp messages, the background delivery worker that drains it,
and the retention sweeps that keep it small.

Most values are read from the environment so the same settings module works
for local development, containers, and production.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-notifier-service-dev-key")

DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "django_rq",
    "outbox",
]

MIDDLEWARE = [
    "outbox.middleware.request_id.RequestIDMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "notifier_service.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "notifier_service.wsgi.application"

# Database
# SQLite by default; set DB_ENGINE=django.db.backends.postgresql for production.
DATABASES = {
    "default": {
        "ENGINE": os.getenv("DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.getenv("DB_NAME", str(BASE_DIR / "data" / "notifier.sqlite3")),
        "USER": os.getenv("DB_USER", ""),
        "PASSWORD": os.getenv("DB_PASSWORD", ""),
        "HOST": os.getenv("DB_HOST", ""),
        "PORT": os.getenv("DB_PORT", ""),
        "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", "60")),
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": (
            "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"
        ),
    },
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Cache / Redis
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
    }
}

RQ_QUEUES = {
    "default": {
        "URL": REDIS_URL,
        "DEFAULT_TIMEOUT": 360,
    },
}

REST_FRAMEWORK = {
    "EXCEPTION_HANDLER": "outbox.exceptions.handlers.custom_exception_handler",
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "UNAUTHENTICATED_USER": None,
}

# Logging is configured by outbox.logging.setup_logging() (structlog).
LOGGING_CONFIG = None

# Outbound message queue
OUTBOX_AUTOSTART = os.getenv("OUTBOX_AUTOSTART", "false").lower() == "true"
OUTBOX_TICK_INTERVAL_MS = int(os.getenv("OUTBOX_TICK_INTERVAL_MS", "1000"))
OUTBOX_BATCH_SIZE = int(os.getenv("OUTBOX_BATCH_SIZE", "5"))
OUTBOX_DEFAULT_MAX_RETRIES = int(os.getenv("OUTBOX_DEFAULT_MAX_RETRIES", "3"))
OUTBOX_RETRY_BACKOFF_SECONDS = int(os.getenv("OUTBOX_RETRY_BACKOFF_SECONDS", "300"))
OUTBOX_RETRY_BACKOFF_MULTIPLIER = float(
    os.getenv("OUTBOX_RETRY_BACKOFF_MULTIPLIER", "1")
)
OUTBOX_SEND_DELAY_MS = int(os.getenv("OUTBOX_SEND_DELAY_MS", "0"))
OUTBOX_RETENTION_DAYS = int(os.getenv("OUTBOX_RETENTION_DAYS", "7"))
OUTBOX_DEDUP_RETENTION_HOURS = int(os.getenv("OUTBOX_DEDUP_RETENTION_HOURS", "24"))
OUTBOX_CLEANUP_INTERVAL_SECONDS = int(
    os.getenv("OUTBOX_CLEANUP_INTERVAL_SECONDS", "3600")
)
OUTBOX_STUCK_PROCESSING_SECONDS = int(
    os.getenv("OUTBOX_STUCK_PROCESSING_SECONDS", "600")
)

# WhatsApp gateway sidecar
WHATSAPP_GATEWAY_URL = os.getenv("WHATSAPP_GATEWAY_URL", "http://localhost:3001/api")
WHATSAPP_GATEWAY_TOKEN = os.getenv("WHATSAPP_GATEWAY_TOKEN", "")
WHATSAPP_GATEWAY_TIMEOUT = int(os.getenv("WHATSAPP_GATEWAY_TIMEOUT", "10"))
