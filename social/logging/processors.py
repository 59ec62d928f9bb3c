"""Custom structlog processors for request context and service metadata."""

import os
import threading

from colorama import Fore, Style, init
from structlog.typing import EventDict, WrappedLogger

from social.logging.context import get_request_id

LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}

CONSOLE_HIDDEN_FIELDS = frozenset(
    {
        "level",
        "timestamp",
        "request_id",
        "logger",
        "event",
        "process_id",
        "thread_id",
        "service_name",
        "environment",
    }
)


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the request ID set by RequestIDMiddleware to log events."""
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service_name and environment to every log event."""
    event_dict["service_name"] = os.getenv("SERVICE_NAME", "social-graph-service")
    event_dict["environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_process_info(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add process and thread identifiers.

    Presence state is process-local, so the process id is what ties a
    connect/disconnect pair to the worker that holds the registry.
    """
    event_dict["process_id"] = os.getpid()
    event_dict["thread_id"] = threading.get_ident()
    return event_dict


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render log events as colored single-line strings.

    Format: [LEVEL] timestamp | request_id | logger_name | message key=value...
    """
    init(autoreset=True)

    level = event_dict.get("level", "INFO").upper()
    timestamp = event_dict.get("timestamp", "")
    request_id = event_dict.get("request_id", "no-request-id")
    logger_name = event_dict.get("logger", "root")
    message = event_dict.get("event", "")

    level_color = LEVEL_COLORS.get(level, Fore.WHITE)

    formatted = (
        f"{level_color}[{level:<8}]{Style.RESET_ALL} "
        f"{Fore.WHITE}{timestamp}{Style.RESET_ALL} | "
        f"{Fore.MAGENTA}{request_id}{Style.RESET_ALL} | "
        f"{Fore.BLUE}{logger_name}{Style.RESET_ALL} | "
        f"{message}"
    )

    extra_fields = {
        k: v for k, v in event_dict.items() if k not in CONSOLE_HIDDEN_FIELDS
    }
    if extra_fields:
        extra_str = " ".join(f"{k}={v}" for k, v in extra_fields.items())
        formatted += f" {Fore.YELLOW}{extra_str}{Style.RESET_ALL}"

    return formatted
