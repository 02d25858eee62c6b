"""
Tests unitaires pour les entites DatabaseSession et DatabaseUser.
"""

from datetime import datetime, timedelta

import pytest

from session_bridge.domain.entities import DatabaseSession, DatabaseUser
from session_bridge.domain.exceptions import ReservedAttributeError


EXPIRES = datetime(2030, 1, 1, 0, 0, 0)


class TestDatabaseSession:
    """Tests pour DatabaseSession."""

    def test_default_attributes_empty(self):
        """Sans attributs: dict vide."""
        session = DatabaseSession(id="s1", user_id="u1", expires_at=EXPIRES)

        assert session.attributes == {}

    @pytest.mark.parametrize("key", ["id", "user_id", "expires_at"])
    def test_reserved_attribute_raises(self, key):
        """Une cle reservee dans les attributs est refusee."""
        with pytest.raises(ReservedAttributeError) as exc_info:
            DatabaseSession(
                id="s1", user_id="u1", expires_at=EXPIRES, attributes={key: "x"}
            )

        assert exc_info.value.keys == (key,)

    def test_from_row_splits_attributes(self):
        """Les colonnes non reservees deviennent des attributs."""
        row = {
            "id": "s1",
            "user_id": "u1",
            "expires_at": EXPIRES,
            "country": "fr",
            "ip_address": None,
        }

        session = DatabaseSession.from_row(row)

        assert session.id == "s1"
        assert session.user_id == "u1"
        assert session.expires_at == EXPIRES
        assert session.attributes == {"country": "fr", "ip_address": None}

    def test_to_row_spreads_attributes(self):
        """to_row() etale les attributs a cote des champs reserves."""
        session = DatabaseSession(
            id="s1", user_id="u1", expires_at=EXPIRES, attributes={"country": "fr"}
        )

        assert session.to_row() == {
            "id": "s1",
            "user_id": "u1",
            "expires_at": EXPIRES,
            "country": "fr",
        }

    def test_from_row_inverse_of_to_row(self):
        """from_row(to_row()) redonne la meme session."""
        session = DatabaseSession(
            id="s1", user_id=42, expires_at=EXPIRES, attributes={"a": 1, "b": [1, 2]}
        )

        assert DatabaseSession.from_row(session.to_row()) == session

    def test_is_expired(self):
        """Expiree si expires_at <= now."""
        session = DatabaseSession(id="s1", user_id="u1", expires_at=EXPIRES)

        assert session.is_expired(EXPIRES) is True
        assert session.is_expired(EXPIRES + timedelta(seconds=1)) is True
        assert session.is_expired(EXPIRES - timedelta(seconds=1)) is False


class TestDatabaseUser:
    """Tests pour DatabaseUser."""

    def test_from_row(self):
        """id en champ, le reste en attributs."""
        user = DatabaseUser.from_row({"id": 7, "username": "john", "email": None})

        assert user.id == 7
        assert user.attributes == {"username": "john", "email": None}

    def test_reserved_attribute_raises(self):
        """'id' dans les attributs est refuse."""
        with pytest.raises(ReservedAttributeError):
            DatabaseUser(id="u1", attributes={"id": "u2"})

    def test_user_id_is_not_reserved_for_users(self):
        """'user_id' est un attribut valide pour un utilisateur."""
        user = DatabaseUser(id="u1", attributes={"user_id": "legacy"})

        assert user.attributes["user_id"] == "legacy"
