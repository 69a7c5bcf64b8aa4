"""Logging configuration and utilities using Loguru.

Key Components:
--------------
- Structured logging with Loguru
- Startup information logging
- Standard library logging bridge for SQLAlchemy

Public API:
----------
setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

get_logger(name: str) -> Logger
    Get a context-aware logger for your module
    Usage: logger = get_logger(__name__)

log_startup_info() -> None
    Log system configuration at startup

configure_sqlalchemy_logging() -> None
    Forward SQLAlchemy's standard library logs into Loguru
"""

import logging
from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks

    Note:
        - Removes default logger and sets up console and file handlers
        - File format is serialized JSON with rotation and retention
    """
    logger.remove()

    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    # Add contextual info to all log records
    logger.configure(extra={"service": "podcaster", "module": "root"})

    # -------------------------------------------------------------------------
    # Console Handler
    # -------------------------------------------------------------------------
    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stdout,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    # -------------------------------------------------------------------------
    # File Handler
    # -------------------------------------------------------------------------
    enqueue_logs = not settings.logging.real_time_debug
    logger.add(
        sink=str(log_file_path),
        level=settings.logging.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[service]} | {extra[module]} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        # Tracebacks would otherwise print local variables such as raw passwords
        diagnose=False,
        enqueue=enqueue_logs,
        catch=True,
        serialize=True,
    )


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module and service context

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("Podcast created", podcast_id=1)
        ```
    """
    return logger.bind(
        module=name,
        service="podcaster",
    )


# =============================================================================
# STARTUP LOGGING
# =============================================================================


def log_startup_info() -> None:
    """Log application configuration on startup.

    Secrets are rendered masked because they are stored as SecretStr.
    """
    local_logger = get_logger(__name__)
    separator = "=" * 50

    local_logger.info("{}", separator)
    local_logger.info("Podcaster service layer")
    local_logger.info("{}", separator)

    local_logger.debug("Configuration:")
    config_dict = settings.model_dump()
    for section_name, section_values in config_dict.items():
        local_logger.debug("  {}:", section_name.upper())
        if isinstance(section_values, dict):
            for key, value in section_values.items():
                if isinstance(value, Path):
                    value = str(value)
                local_logger.debug("    {}: {}", key.upper(), value)
        else:
            local_logger.debug("    {}", section_values)


# =============================================================================
# THIRD-PARTY LOGGING INTEGRATION
# =============================================================================


class _LoguruForwardingHandler(logging.Handler):
    """Standard library handler that re-emits records through Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.bind(module=record.name).log(level, self.format(record))


def configure_sqlalchemy_logging(level: int = logging.WARNING) -> None:
    """Forward SQLAlchemy engine logs to Loguru.

    Args:
        level: Minimum standard library level to forward
    """
    sqlalchemy_logger = logging.getLogger("sqlalchemy")
    sqlalchemy_logger.handlers = [_LoguruForwardingHandler()]
    sqlalchemy_logger.setLevel(level)
    sqlalchemy_logger.propagate = False
