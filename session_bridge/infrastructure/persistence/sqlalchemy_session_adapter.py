"""
SQLAlchemySessionAdapter - Adapter SQLAlchemy async pour les sessions.

Implemente le port Adapter avec SQLAlchemy Core.
Responsabilite unique: traduire le contrat sessions/utilisateurs en
requetes SQL, eventuellement redirigees vers un schema.

Points cles:
------------
- get_session_and_user fait UNE jointure session -> utilisateur.
  Exactement une ligne: (session, user). Zero ou plusieurs: (None, None).
- Chaque operation ouvre sa propre connexion (engine.begin() pour les
  ecritures, engine.connect() pour les lectures). Aucune transaction
  n'est partagee entre deux appels.
- Les erreurs SQLAlchemy (IntegrityError, OperationalError...) sont
  loggees puis relancees sans traduction.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, List, Optional, Tuple

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from session_bridge.domain.entities import DatabaseSession, DatabaseUser
from session_bridge.domain.ports import Adapter
from session_bridge.infrastructure.logging import get_logger
from session_bridge.infrastructure.persistence.tables import AuthTables


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SQLAlchemySessionAdapter(Adapter):
    """
    Adapter sessions/utilisateurs sur SQLAlchemy async.

    Attributes:
        tables: Paire de tables modele (jamais modifiee).
        default_schema: Schema utilise quand un appel n'en donne pas.

    Example:
        >>> engine = create_async_engine("postgresql+asyncpg://...")
        >>> adapter = SQLAlchemySessionAdapter(engine, session_table, user_table)
        >>> session, user = await adapter.get_session_and_user("abc", schema="tenant_a")
    """

    def __init__(
        self,
        engine: Any,
        session_table: Table,
        user_table: Table,
        default_schema: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialise l'adapter.

        Args:
            engine: AsyncEngine (ou DatabaseManager) exposant begin()/connect().
            session_table: Table des sessions (id, user_id, expires_at, ...).
            user_table: Table des utilisateurs (id, ...).
            default_schema: Schema par defaut (None = schema des tables).
            clock: Source de l'heure courante pour delete_expired_sessions.

        Raises:
            InvalidTableError: Si une table n'a pas les colonnes requises.
        """
        self._engine = engine
        self.tables = AuthTables(session=session_table, user=user_table)
        self.default_schema = default_schema
        self._clock = clock or _utcnow
        self._logger = get_logger(__name__, default_schema=default_schema)

    def _get_tables(self, schema: Optional[str]) -> AuthTables:
        """Tables a utiliser pour cet appel (copie si schema)."""
        # Schema vide ou None: schema par defaut, puis tables telles quelles
        if not schema:
            schema = self.default_schema
        if not schema:
            return self.tables
        return self.tables.for_schema(schema)

    @asynccontextmanager
    async def _connection(
        self,
        operation: str,
        schema: Optional[str],
        write: bool = True,
    ) -> AsyncIterator[AsyncConnection]:
        """Ouvre une connexion et logge les erreurs de la base avant de relancer."""
        context = self._engine.begin() if write else self._engine.connect()
        try:
            async with context as conn:
                yield conn
        except SQLAlchemyError as e:
            self._logger.error(
                "adapter_operation_failed",
                operation=operation,
                schema=schema,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

    # ───────────────────────────────────────────────────────────────────────
    # Lectures
    # ───────────────────────────────────────────────────────────────────────

    async def get_session_and_user(
        self,
        session_id: str,
        schema: Optional[str] = None,
    ) -> Tuple[Optional[DatabaseSession], Optional[DatabaseUser]]:
        """
        Recupere une session et son utilisateur via une jointure.

        Args:
            session_id: Identifiant de la session.
            schema: Schema cible pour cet appel.

        Returns:
            (session, user) si la jointure donne exactement une ligne,
            sinon (None, None).
        """
        tables = self._get_tables(schema)
        session_table, user_table = tables.session, tables.user

        stmt = (
            select(*session_table.c, *user_table.c)
            .select_from(
                session_table.join(
                    user_table, session_table.c.user_id == user_table.c.id
                )
            )
            .where(session_table.c.id == session_id)
        )

        async with self._connection("get_session_and_user", schema, write=False) as conn:
            result = await conn.execute(stmt)
            rows = result.all()

        if len(rows) != 1:
            if rows:
                self._logger.warning(
                    "ambiguous_session_join",
                    session_id=session_id,
                    schema=schema,
                    row_count=len(rows),
                )
            return None, None

        # Colonnes session puis colonnes utilisateur, dans l'ordre du select
        row = rows[0]
        split = len(session_table.c)
        session_row = dict(zip(session_table.c.keys(), row[:split]))
        user_row = dict(zip(user_table.c.keys(), row[split:]))
        return DatabaseSession.from_row(session_row), DatabaseUser.from_row(user_row)

    async def get_user_sessions(
        self,
        user_id: Any,
        schema: Optional[str] = None,
    ) -> List[DatabaseSession]:
        """Liste les sessions d'un utilisateur."""
        session_table = self._get_tables(schema).session
        stmt = select(*session_table.c).where(session_table.c.user_id == user_id)

        async with self._connection("get_user_sessions", schema, write=False) as conn:
            result = await conn.execute(stmt)
            rows = result.all()

        keys = session_table.c.keys()
        return [DatabaseSession.from_row(dict(zip(keys, row))) for row in rows]

    # ───────────────────────────────────────────────────────────────────────
    # Ecritures
    # ───────────────────────────────────────────────────────────────────────

    async def set_session(
        self,
        session: DatabaseSession,
        schema: Optional[str] = None,
    ) -> None:
        """
        Insere une session.

        Les attributs sont etales en colonnes a cote de id, user_id
        et expires_at.

        Raises:
            sqlalchemy.exc.IntegrityError: id duplique ou user_id inconnu.
        """
        session_table = self._get_tables(schema).session
        stmt = insert(session_table).values(**session.to_row())

        async with self._connection("set_session", schema) as conn:
            await conn.execute(stmt)

        self._logger.debug(
            "session_created",
            session_id=session.id,
            user_id=session.user_id,
            schema=schema,
        )

    async def update_session_expiration(
        self,
        session_id: str,
        expires_at: datetime,
        schema: Optional[str] = None,
    ) -> None:
        """Met a jour expires_at (sans effet si la session n'existe pas)."""
        session_table = self._get_tables(schema).session
        stmt = (
            update(session_table)
            .where(session_table.c.id == session_id)
            .values(expires_at=expires_at)
        )

        async with self._connection("update_session_expiration", schema) as conn:
            result = await conn.execute(stmt)
            rowcount = result.rowcount

        self._logger.debug(
            "session_expiration_updated",
            session_id=session_id,
            schema=schema,
            rowcount=rowcount,
        )

    async def delete_session(
        self,
        session_id: str,
        schema: Optional[str] = None,
    ) -> None:
        """Supprime une session (sans effet si absente)."""
        session_table = self._get_tables(schema).session
        stmt = delete(session_table).where(session_table.c.id == session_id)

        async with self._connection("delete_session", schema) as conn:
            result = await conn.execute(stmt)
            rowcount = result.rowcount

        self._logger.debug(
            "session_deleted",
            session_id=session_id,
            schema=schema,
            rowcount=rowcount,
        )

    async def delete_user_sessions(
        self,
        user_id: Any,
        schema: Optional[str] = None,
    ) -> None:
        """Supprime toutes les sessions d'un utilisateur."""
        session_table = self._get_tables(schema).session
        stmt = delete(session_table).where(session_table.c.user_id == user_id)

        async with self._connection("delete_user_sessions", schema) as conn:
            result = await conn.execute(stmt)
            rowcount = result.rowcount

        self._logger.debug(
            "user_sessions_deleted",
            user_id=user_id,
            schema=schema,
            rowcount=rowcount,
        )

    async def delete_expired_sessions(
        self,
        schema: Optional[str] = None,
    ) -> None:
        """Supprime les sessions dont expires_at <= maintenant."""
        session_table = self._get_tables(schema).session
        now = self._clock()
        stmt = delete(session_table).where(session_table.c.expires_at <= now)

        async with self._connection("delete_expired_sessions", schema) as conn:
            result = await conn.execute(stmt)
            rowcount = result.rowcount

        self._logger.debug(
            "expired_sessions_deleted",
            schema=schema,
            now=now.isoformat(),
            rowcount=rowcount,
        )
