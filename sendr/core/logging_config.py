# sendr/core/logging_config.py
"""
Centralized logging configuration for the application.

Keeps the storefront's own loggers at the configured level and quiets the
database drivers and HTTP clients, which are chatty at INFO.
"""

import logging
import os


def configure_logging(level: str = None):
    """
    Configure logging for the application.

    - App code: INFO (or whatever LOG_LEVEL says)
    - Database (sqlalchemy, asyncpg, aiosqlite): WARNING only
    - HTTP clients and servers: WARNING only
    """
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # Quiet database loggers
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    # Quiet HTTP loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger("sendr").setLevel(numeric_level)
    logging.getLogger("__main__").setLevel(numeric_level)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured at level: %s", log_level)
