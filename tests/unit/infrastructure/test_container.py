"""
Tests unitaires pour le Container d'injection de dependances.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import Column, MetaData, String

from session_bridge.infrastructure.config import AdapterSettings
from session_bridge.infrastructure.container import Container, get_container, reset_container
from session_bridge.infrastructure.persistence import (
    SQLAlchemySessionAdapter,
    build_session_table,
    build_user_table,
)


@pytest.fixture
def settings() -> AdapterSettings:
    """Settings de test."""
    return AdapterSettings(
        _env_file=None,
        database_url="sqlite+aiosqlite://",
        default_schema="tenant_a",
        user_table="accounts",
        session_table="logins",
    )


class TestContainer:
    """Tests pour Container."""

    def setup_method(self) -> None:
        """Reset le container avant chaque test."""
        reset_container()

    def test_create_with_default_tables(self, settings: AdapterSettings) -> None:
        """Sans tables: tables minimales nommees depuis les settings."""
        container = Container.create(settings=settings, database=MagicMock())

        assert isinstance(container.adapter, SQLAlchemySessionAdapter)
        assert container.adapter.tables.user.name == "accounts"
        assert container.adapter.tables.session.name == "logins"
        assert set(container.metadata.tables) == {"accounts", "logins"}

    def test_default_schema_from_settings(self, settings: AdapterSettings) -> None:
        """default_schema est transmis a l'adapter."""
        container = Container.create(settings=settings, database=MagicMock())

        assert container.adapter.default_schema == "tenant_a"

    def test_create_with_application_tables(self, settings: AdapterSettings) -> None:
        """Tables de l'application utilisees telles quelles."""
        metadata = MetaData()
        users = build_user_table(metadata, Column("email", String(255)))
        sessions = build_session_table(metadata, users)

        container = Container.create(
            settings=settings,
            database=MagicMock(),
            session_table=sessions,
            user_table=users,
        )

        assert container.adapter.tables.session is sessions
        assert container.metadata is metadata

    def test_create_with_single_table_raises(self, settings: AdapterSettings) -> None:
        """Une seule table fournie: ValueError."""
        users = build_user_table(MetaData())

        with pytest.raises(ValueError):
            Container.create(settings=settings, database=MagicMock(), user_table=users)

    def test_create_builds_database_from_settings(self, settings: AdapterSettings) -> None:
        """Sans DatabaseManager: cree depuis database_url."""
        container = Container.create(settings=settings)

        assert container.database.engine.url.drivername == "sqlite+aiosqlite"

    def test_get_container_singleton(self, monkeypatch) -> None:
        """get_container() retourne toujours la meme instance."""
        monkeypatch.setenv("SESSION_BRIDGE_DATABASE_URL", "sqlite+aiosqlite://")
        from session_bridge.infrastructure.config import get_settings
        get_settings.cache_clear()

        try:
            assert get_container() is get_container()
        finally:
            reset_container()
            get_settings.cache_clear()
