"""
Loguru logging system with context filtering.

Filtering by:
- service: galaksion_api, database, scheduler
- function: report, campaign_control, token, zones, automation

Usage examples:
    from utils.logging_setup import get_logger

    # Basic logger
    logger = get_logger()
    logger.info("Simple message")

    # Logger with context
    logger = get_logger(service="galaksion_api", function="token")
    logger.info("Token refreshed")
"""

import os
import sys
from pathlib import Path
from loguru import logger
from contextvars import ContextVar
from utils.time_utils import get_local_time

# Context variables shared between functions
_current_service: ContextVar[str | None] = ContextVar("current_service", default=None)
_current_function: ContextVar[str | None] = ContextVar("current_function", default=None)

# Logs path
LOG_DIR = Path(os.environ.get("GALAKSION_LOG_DIR", Path(__file__).parent.parent / "logs"))

# Initialization flag
_initialized = False


def _format_record(record: dict) -> str:
    """Format a log record with its context."""
    extra = record.get("extra", {})
    service = extra.get("service") or _current_service.get() or "app"
    function = extra.get("function") or _current_function.get()

    # Timestamp in reporting time
    timestamp = get_local_time().strftime("%Y-%m-%d %H:%M:%S")

    context_parts = [service]
    if function:
        context_parts.append(function)
    context = " | ".join(context_parts)

    level = record["level"].name

    # Braces in the message must not be treated as format fields
    message = record["message"].replace("{", "{{").replace("}", "}}")

    line = f"{timestamp} | {level:<8} | {context} | {message}\n"
    if record.get("exception"):
        line += "{exception}"
    return line


def _filter_by_service(service_name: str):
    """Build a filter for a single service."""
    def filter_func(record):
        extra = record.get("extra", {})
        record_service = extra.get("service") or _current_service.get()
        return record_service == service_name
    return filter_func


def setup_logging():
    """
    Initialize logging.
    Called once on application start.
    """
    global _initialized
    if _initialized:
        return logger

    # Drop the default handler
    logger.remove()

    # Console output (everything)
    logger.add(
        sys.stdout,
        format=_format_record,
        level="DEBUG",
        colorize=True,
    )

    LOG_DIR.mkdir(parents=True, exist_ok=True)

    # Main log file (everything)
    logger.add(
        LOG_DIR / "galaksion_all.log",
        format=_format_record,
        level="DEBUG",
        rotation="50 MB",
        retention="7 days",
        compression="gz",
        encoding="utf-8",
    )

    # Errors only
    logger.add(
        LOG_DIR / "galaksion_errors.log",
        format=_format_record,
        level="ERROR",
        rotation="10 MB",
        retention="30 days",
        compression="gz",
        encoding="utf-8",
    )

    # Per-service files
    services = ["galaksion_api", "database", "scheduler"]
    for service in services:
        logger.add(
            LOG_DIR / f"service_{service}.log",
            format=_format_record,
            level="DEBUG",
            filter=_filter_by_service(service),
            rotation="20 MB",
            retention="7 days",
            compression="gz",
            encoding="utf-8",
        )

    _initialized = True
    logger.bind(service="app").info("Logging initialized")
    return logger


def get_logger(
    service: str | None = None,
    function: str | None = None,
):
    """
    Get a logger bound to a context.

    Args:
        service: Service name (galaksion_api, database, scheduler)
        function: Function name (report, campaign_control, token, ...)

    Returns:
        Logger with bound context

    Example:
        logger = get_logger(service="galaksion_api", function="report")
        logger.info("Page fetched")
        # Output: 2025-01-15 12:00:00 | INFO     | galaksion_api | report | Page fetched
    """
    context = {}
    if service:
        context["service"] = service
    if function:
        context["function"] = function

    return logger.bind(**context)


def set_context(
    service: str | None = None,
    function: str | None = None,
):
    """
    Set the context for the current thread.

    Example:
        set_context(service="scheduler", function="report")
        logger.info("Message")  # service and function are added automatically
    """
    if service is not None:
        _current_service.set(service)
    if function is not None:
        _current_function.set(function)
