"""
Configuration et fixtures pytest.

Base de test: SQLite en memoire (aiosqlite, StaticPool).
Une seconde base en memoire est attachee sous le nom `tenant_b`
et joue le role d'un schema alternatif.
"""

from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy import Column, MetaData, String, event, insert
from sqlalchemy.pool import StaticPool

from session_bridge.domain.entities import DatabaseSession, DatabaseUser
from session_bridge.infrastructure.persistence import (
    DatabaseManager,
    SQLAlchemySessionAdapter,
    build_session_table,
    build_user_table,
)


TENANT_SCHEMA = "tenant_b"

# Heure "courante" figee pour l'adapter (naive UTC, comme SQLite la rend)
NOW = datetime(2026, 1, 1, 12, 0, 0)


# ═══════════════════════════════════════════════════════════════════════════════
# FIXTURES - TABLES
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def metadata() -> MetaData:
    """MetaData des tables de test."""
    return MetaData()


@pytest.fixture
def user_table(metadata: MetaData):
    """Table utilisateurs avec un attribut username."""
    return build_user_table(metadata, Column("username", String(50)))


@pytest.fixture
def session_table(metadata: MetaData, user_table):
    """Table sessions avec un attribut country."""
    return build_session_table(metadata, user_table, Column("country", String(2)))


# ═══════════════════════════════════════════════════════════════════════════════
# FIXTURES - BASE DE DONNEES
# ═══════════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database(metadata: MetaData, user_table, session_table):
    """DatabaseManager sur SQLite memoire, tables creees dans main et tenant_b."""
    db = DatabaseManager("sqlite+aiosqlite://", poolclass=StaticPool)

    @event.listens_for(db.engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute(f"ATTACH DATABASE ':memory:' AS {TENANT_SCHEMA}")
        cursor.close()

    await db.create_all(metadata)
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def adapter(database: DatabaseManager, session_table, user_table):
    """Adapter avec horloge figee a NOW et utilisateurs u1/u2 en base."""
    adapter = SQLAlchemySessionAdapter(
        database.engine,
        session_table,
        user_table,
        clock=lambda: NOW,
    )
    tenant = adapter.tables.for_schema(TENANT_SCHEMA)
    await database.create_tables(tenant.user, tenant.session)

    async with database.begin() as conn:
        await conn.execute(
            insert(user_table),
            [{"id": "u1", "username": "a"}, {"id": "u2", "username": "b"}],
        )
        await conn.execute(
            insert(tenant.user),
            [{"id": "u1", "username": "tenant-a"}],
        )
    return adapter


@pytest.fixture
def user_u1() -> DatabaseUser:
    """Utilisateur u1 tel qu'en base (schema par defaut)."""
    return DatabaseUser(id="u1", attributes={"username": "a"})


@pytest.fixture
def make_session():
    """Factory de sessions pour u1 par defaut."""

    def _make(session_id: str, user_id: str = "u1", expires_at: datetime = None,
              country: str = "fr") -> DatabaseSession:
        return DatabaseSession(
            id=session_id,
            user_id=user_id,
            expires_at=expires_at or datetime(2026, 1, 1, 13, 0, 0),
            attributes={"country": country},
        )

    return _make
