"""
Container d'injection de dependances.

Assemble settings -> DatabaseManager -> tables -> adapter.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import MetaData, Table

from session_bridge.infrastructure.config import AdapterSettings, get_settings
from session_bridge.infrastructure.persistence.database import DatabaseManager
from session_bridge.infrastructure.persistence.sqlalchemy_session_adapter import (
    SQLAlchemySessionAdapter,
)
from session_bridge.infrastructure.persistence.tables import (
    build_session_table,
    build_user_table,
)


@dataclass
class Container:
    """
    Conteneur d'injection de dependances.

    Example:
        >>> container = Container.create()
        >>> await container.database.create_all(container.metadata)
        >>> await container.adapter.delete_expired_sessions()
    """

    settings: AdapterSettings
    database: DatabaseManager
    metadata: MetaData
    adapter: SQLAlchemySessionAdapter

    @classmethod
    def create(
        cls,
        settings: Optional[AdapterSettings] = None,
        database: Optional[DatabaseManager] = None,
        session_table: Optional[Table] = None,
        user_table: Optional[Table] = None,
    ) -> "Container":
        """
        Factory pour creer un conteneur avec toutes les dependances.

        Sans tables fournies, declare des tables minimales (sans
        attributs) avec les noms des settings.

        Args:
            settings: Configuration (defaut: get_settings()).
            database: DatabaseManager existant (defaut: cree depuis settings).
            session_table: Table des sessions de l'application.
            user_table: Table des utilisateurs de l'application.

        Returns:
            Container configure.
        """
        settings = settings or get_settings()
        if database is None:
            database = DatabaseManager(settings.database_url, echo=settings.echo)

        if (session_table is None) != (user_table is None):
            raise ValueError("session_table et user_table vont ensemble")

        if user_table is None:
            metadata = MetaData()
            user_table = build_user_table(metadata, name=settings.user_table)
            session_table = build_session_table(
                metadata, user_table, name=settings.session_table
            )
        metadata = user_table.metadata

        adapter = SQLAlchemySessionAdapter(
            database.engine,
            session_table,
            user_table,
            default_schema=settings.default_schema,
        )
        return cls(
            settings=settings,
            database=database,
            metadata=metadata,
            adapter=adapter,
        )


_container: Container | None = None


def get_container() -> Container:
    """Recupere ou cree le conteneur global."""
    global _container
    if _container is None:
        _container = Container.create()
    return _container


def reset_container() -> None:
    """Reset le conteneur global (utile pour les tests)."""
    global _container
    _container = None
