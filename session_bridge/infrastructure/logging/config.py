"""
Logging Config - Configuration structlog.

Modes:
------
- Development: Pretty print, couleurs
- Production: JSON, timestamp ISO

Seul le logger `session_bridge` recoit un handler: le logging racine de
l'application hote n'est pas touche.

Usage:
------
    from session_bridge.infrastructure.logging import configure_logging, get_logger

    configure_logging(json_logs=True)
    logger = get_logger(__name__, default_schema="tenant_a")
    logger.info("session_deleted", session_id="abc")
"""

import logging
import sys
from typing import Any, Optional, TextIO

import structlog

from session_bridge.infrastructure.config import AdapterSettings


LOGGER_NAME = "session_bridge"


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structlog et le logger du package.

    Rappeler la fonction remplace le handler precedent.

    Args:
        json_logs: True pour JSON (production), False pour pretty.
        log_level: Niveau minimum (DEBUG, INFO, WARNING, ERROR).
        stream: Flux de sortie (defaut: stdout).
    """
    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=stream is None),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if getattr(handler, "_session_bridge", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._session_bridge = True
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, log_level.upper()))


def configure_from_settings(settings: AdapterSettings) -> None:
    """Configure le logging depuis AdapterSettings."""
    configure_logging(json_logs=settings.json_logs, log_level=settings.log_level)


def get_logger(name: Optional[str] = None, **context: Any) -> structlog.stdlib.BoundLogger:
    """
    Retourne un logger structure.

    Args:
        name: Nom du logger (defaut: session_bridge).
        **context: Champs lies a chaque evenement (schema, adapter...).

    Returns:
        Logger structlog.
    """
    return structlog.get_logger(name or LOGGER_NAME, **context)
