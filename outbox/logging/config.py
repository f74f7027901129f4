"""Structlog configuration for dual output: JSON files and colored console."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from outbox.logging.processors import (
    add_correlation_context,
    add_process_info,
    add_service_context,
    console_renderer,
)

DEFAULT_LOG_FILE_PATH = "./logs/notifier-service.log"


def setup_logging() -> None:
    """Configure structlog with JSON file logs and colored console logs.

    File output is JSON with full metadata in a rotating file (50MB per
    file). Console output is the colored single-line format produced by
    ``console_renderer``.

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/notifier-service.log)
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME: Service name for metadata (default: notifier-service)
    - ENVIRONMENT: Deployment environment (default: development)
    """
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE_PATH)
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(format="%(message)s", level=level, handlers=[])

    # 50MB per file, 40 backups
    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=50 * 1024 * 1024,
        backupCount=40,
        encoding="utf-8",
    )
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_correlation_context,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=[
                # For logs from libraries that don't use structlog
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                add_correlation_context,
                add_service_context,
                add_process_info,
            ],
        )
    )

    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                add_correlation_context,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger = structlog.get_logger(__name__)
    logger.info(
        "logging_configured",
        log_file=log_file_path,
        log_level=log_level,
    )
