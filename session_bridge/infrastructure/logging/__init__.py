"""
Logging Infrastructure - Logging structure avec structlog.

Usage:
------
    from session_bridge.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("session_deleted", session_id="abc", schema="tenant_a")
"""

from session_bridge.infrastructure.logging.config import (
    LOGGER_NAME,
    configure_logging,
    get_logger,
)

__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
