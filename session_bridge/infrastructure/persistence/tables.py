"""
Tables d'authentification - Declaration, validation et redirection de schema.

Tables:
-------
- utilisateurs (defaut: auth_user): id + colonnes de l'application
- sessions (defaut: user_session): id, user_id (FK), expires_at + colonnes

Les colonnes reservees sont designees par leur *cle* SQLAlchemy
(Column.key), pas par le nom physique: une colonne `Column("userId",
key="user_id")` convient.

Redirection de schema:
----------------------
Les tables fournies a l'adapter sont des modeles immuables. Pour un
appel avec `schema="tenant_a"`, AuthTables.for_schema() retourne une
COPIE des deux tables dans un MetaData neuf, avec le schema remplace.
Le modele d'origine n'est jamais modifie: deux appels concurrents sur
des schemas differents ne se marchent pas dessus.

    tables = AuthTables(session=session_table, user=user_table)
    tenant = tables.for_schema("tenant_a")
    tenant.session.schema    # "tenant_a"
    tables.session.schema    # inchange
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from sqlalchemy import Column, DateTime, ForeignKey, MetaData, String, Table

from session_bridge.domain.entities import (
    SESSION_RESERVED_COLUMNS,
    USER_RESERVED_COLUMNS,
)
from session_bridge.domain.exceptions import InvalidSchemaNameError, InvalidTableError


DEFAULT_USER_TABLE = "auth_user"
DEFAULT_SESSION_TABLE = "user_session"

# Nombre de paires copiees gardees en memoire (une par schema et modele)
SCHEMA_COPY_CACHE_SIZE = 128


# ═══════════════════════════════════════════════════════════════════════════════
# DECLARATION
# ═══════════════════════════════════════════════════════════════════════════════

def build_user_table(
    metadata: MetaData,
    *columns: Column,
    name: str = DEFAULT_USER_TABLE,
    schema: Optional[str] = None,
    id_type: Any = String,
) -> Table:
    """
    Declare une table utilisateurs compatible avec l'adapter.

    Args:
        metadata: MetaData cible.
        *columns: Colonnes d'attributs (username, email...).
        name: Nom de la table.
        schema: Schema de la table.
        id_type: Type de la cle primaire.

    Returns:
        Table avec `id` en cle primaire.

    Example:
        >>> users = build_user_table(metadata, Column("username", String(50)))
    """
    return Table(
        name,
        metadata,
        Column("id", id_type, primary_key=True),
        *columns,
        schema=schema,
    )


def build_session_table(
    metadata: MetaData,
    user_table: Table,
    *columns: Column,
    name: str = DEFAULT_SESSION_TABLE,
    schema: Optional[str] = None,
) -> Table:
    """
    Declare une table sessions liee a la table utilisateurs.

    `user_id` reprend le type de `user_table.c.id` et porte la cle
    etrangere. `expires_at` est un timestamp avec fuseau, non nul.

    Args:
        metadata: MetaData cible (celle de user_table en general).
        user_table: Table utilisateurs referencee.
        *columns: Colonnes d'attributs (ip_address, country...).
        name: Nom de la table.
        schema: Schema de la table.

    Returns:
        Table sessions.
    """
    validate_user_table(user_table)
    return Table(
        name,
        metadata,
        Column("id", String(255), primary_key=True),
        Column(
            "user_id",
            user_table.c.id.type,
            ForeignKey(user_table.c.id),
            nullable=False,
            index=True,
        ),
        Column("expires_at", DateTime(timezone=True), nullable=False),
        *columns,
        schema=schema,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════════════════════

def _check_columns(table: Table, required: tuple) -> None:
    missing = [key for key in required if key not in table.c]
    if missing:
        raise InvalidTableError(table.fullname, missing)


def validate_session_table(table: Table) -> None:
    """Verifie que la table expose id, user_id et expires_at."""
    _check_columns(table, SESSION_RESERVED_COLUMNS)


def validate_user_table(table: Table) -> None:
    """Verifie que la table expose id."""
    _check_columns(table, USER_RESERVED_COLUMNS)


# ═══════════════════════════════════════════════════════════════════════════════
# PAIRE DE TABLES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AuthTables:
    """
    Paire de tables (sessions, utilisateurs) utilisee par l'adapter.

    Value Object: jamais modifie apres creation. Les copies par schema
    vivent dans un cache LRU borne au niveau du module.

    Attributes:
        session: Table des sessions.
        user: Table des utilisateurs.
    """

    session: Table
    user: Table

    def __post_init__(self) -> None:
        validate_session_table(self.session)
        validate_user_table(self.user)

    @property
    def schema(self) -> Optional[str]:
        """Schema de la table des sessions."""
        return self.session.schema

    def for_schema(self, schema: str) -> "AuthTables":
        """
        Retourne la paire de tables redirigee vers `schema`.

        Args:
            schema: Nom du schema cible (chaine non vide).

        Returns:
            Nouvelle AuthTables dont les deux tables portent `schema`.

        Raises:
            InvalidSchemaNameError: Si le nom est vide ou pas une chaine.
        """
        if not isinstance(schema, str) or not schema.strip():
            raise InvalidSchemaNameError(schema)
        return _copy_tables(self.session, self.user, schema)


@lru_cache(maxsize=SCHEMA_COPY_CACHE_SIZE)
def _copy_tables(session: Table, user: Table, schema: str) -> AuthTables:
    # Les deux copies partagent un MetaData neuf pour que la FK
    # user_id -> id se resolve dans le schema cible.
    metadata = MetaData()
    user_copy = user.to_metadata(metadata, schema=schema)
    session_copy = session.to_metadata(metadata, schema=schema)
    return AuthTables(session=session_copy, user=user_copy)
