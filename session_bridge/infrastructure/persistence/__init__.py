"""
Adapters pour la persistance des sessions.

Ce module expose l'adapter SQLAlchemy, les helpers de tables
et le DatabaseManager.
"""

from session_bridge.infrastructure.persistence.database import DatabaseManager
from session_bridge.infrastructure.persistence.sqlalchemy_session_adapter import (
    SQLAlchemySessionAdapter,
)
from session_bridge.infrastructure.persistence.tables import (
    AuthTables,
    build_session_table,
    build_user_table,
    validate_session_table,
    validate_user_table,
)

__all__ = [
    "SQLAlchemySessionAdapter",
    "DatabaseManager",
    "AuthTables",
    "build_user_table",
    "build_session_table",
    "validate_session_table",
    "validate_user_table",
]
