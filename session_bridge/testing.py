"""
Verification de conformite d'un Adapter.

Exerce tout le contrat du port Adapter contre une implementation
quelconque, a partir d'un utilisateur deja present en base.
Leve AssertionError a la premiere violation.

Usage:
------
    from session_bridge.testing import check_adapter

    async def test_my_adapter(adapter, existing_user):
        await check_adapter(adapter, existing_user)

Dates:
------
Certaines bases (SQLite) ne conservent pas le fuseau horaire et
rendent des dates naives en UTC. Les comparaisons d'expiration
considerent donc une date naive comme UTC.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from session_bridge.domain.entities import DatabaseSession, DatabaseUser
from session_bridge.domain.ports import Adapter


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _same_instant(a: datetime, b: datetime) -> bool:
    return _as_utc(a) == _as_utc(b)


def _assert_same_session(actual: Optional[DatabaseSession], expected: DatabaseSession) -> None:
    assert actual is not None, f"session {expected.id} introuvable"
    assert actual.id == expected.id, f"id {actual.id!r} != {expected.id!r}"
    assert actual.user_id == expected.user_id, "user_id different"
    assert _same_instant(actual.expires_at, expected.expires_at), (
        f"expires_at {actual.expires_at} != {expected.expires_at}"
    )
    assert actual.attributes == expected.attributes, (
        f"attributs {actual.attributes} != {expected.attributes}"
    )


def _new_session(
    user: DatabaseUser,
    expires_at: datetime,
    attributes: Optional[Dict[str, Any]],
) -> DatabaseSession:
    return DatabaseSession(
        id=uuid4().hex,
        user_id=user.id,
        expires_at=expires_at,
        attributes=dict(attributes or {}),
    )


async def check_adapter(
    adapter: Adapter,
    user: DatabaseUser,
    session_attributes: Optional[Dict[str, Any]] = None,
    schema: Optional[str] = None,
) -> None:
    """
    Verifie qu'un adapter respecte le contrat.

    Laisse la table des sessions vide pour `user` a la fin.

    Args:
        adapter: Adapter a verifier.
        user: Utilisateur existant (id + attributs tels qu'en base).
        session_attributes: Attributs de session a inserer (colonnes
            supplementaires de la table des sessions).
        schema: Schema passe a chaque appel.
    """
    now = datetime.now(timezone.utc).replace(microsecond=0)
    await adapter.delete_user_sessions(user.id, schema=schema)

    # Session inconnue
    missing = await adapter.get_session_and_user(uuid4().hex, schema=schema)
    assert missing == (None, None), "session inconnue: (None, None) attendu"

    # Insertion puis lecture
    session = _new_session(user, now + timedelta(hours=1), session_attributes)
    await adapter.set_session(session, schema=schema)
    found_session, found_user = await adapter.get_session_and_user(session.id, schema=schema)
    _assert_same_session(found_session, session)
    assert found_user == user, f"utilisateur {found_user} != {user}"

    # Sessions de l'utilisateur
    sessions = await adapter.get_user_sessions(user.id, schema=schema)
    assert len(sessions) == 1, f"1 session attendue, {len(sessions)} trouvee(s)"
    _assert_same_session(sessions[0], session)

    # Mise a jour de l'expiration
    new_expiration = now + timedelta(hours=2)
    await adapter.update_session_expiration(session.id, new_expiration, schema=schema)
    updated, _ = await adapter.get_session_and_user(session.id, schema=schema)
    session.expires_at = new_expiration
    _assert_same_session(updated, session)

    # Mise a jour d'une session inconnue: aucun effet
    await adapter.update_session_expiration(uuid4().hex, new_expiration, schema=schema)
    assert len(await adapter.get_user_sessions(user.id, schema=schema)) == 1

    # Suppression (deux fois: idempotent)
    await adapter.delete_session(session.id, schema=schema)
    await adapter.delete_session(session.id, schema=schema)
    assert await adapter.get_session_and_user(session.id, schema=schema) == (None, None)

    # Suppression par utilisateur
    for _ in range(2):
        await adapter.set_session(
            _new_session(user, now + timedelta(hours=1), session_attributes),
            schema=schema,
        )
    await adapter.delete_user_sessions(user.id, schema=schema)
    assert await adapter.get_user_sessions(user.id, schema=schema) == []

    # Suppression des sessions expirees
    expired = _new_session(user, now - timedelta(hours=1), session_attributes)
    active = _new_session(user, now + timedelta(hours=1), session_attributes)
    await adapter.set_session(expired, schema=schema)
    await adapter.set_session(active, schema=schema)
    await adapter.delete_expired_sessions(schema=schema)
    remaining = await adapter.get_user_sessions(user.id, schema=schema)
    assert [s.id for s in remaining] == [active.id], "seule la session active doit rester"

    await adapter.delete_user_sessions(user.id, schema=schema)
