"""Structlog configuration for dual output: JSON files and colored console."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from social.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)


def setup_logging() -> None:
    """Configure structlog with JSON file logs and colored console logs.

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/social-graph-service.log)
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME: Service name for metadata (default: social-graph-service)
    - ENVIRONMENT: Deployment environment (default: development)
    """
    log_file_path = os.getenv("LOG_FILE_PATH", "./logs/social-graph-service.log")
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    # 100MB per file
    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=100 * 1024 * 1024,
        backupCount=240,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_request_context,
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
                structlog.stdlib.add_log_level,
                structlog.stdlib.add_logger_name,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                add_request_context,
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
                add_request_context,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_file=log_file_path,
        log_level=log_level_name,
    )
