"""Configuration module for Podcaster.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

log_startup_info() -> None
    Log system configuration at startup

configure_sqlalchemy_logging() -> None
    Forward SQLAlchemy logs into Loguru

Usage:
------
```python
from podcaster.config import get_logger, settings

logger = get_logger(__name__)
logger.info("Connecting", url=settings.database.url)
```
"""

from .logging import (
    configure_sqlalchemy_logging,
    get_logger,
    log_startup_info,
    setup_loguru_logger,
)
from .settings import Settings, settings

__all__ = [
    "Settings",
    "configure_sqlalchemy_logging",
    "get_logger",
    "log_startup_info",
    "settings",
    "setup_loguru_logger",
]
