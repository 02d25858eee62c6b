"""
Entite DatabaseSession - Session d'authentification persistee.

Represente une ligne de la table des sessions telle que la voit
la librairie d'authentification.

Attributes:
-----------
- id: Identifiant de session (cle primaire, string)
- user_id: Reference vers l'utilisateur proprietaire
- expires_at: Date d'expiration absolue
- attributes: Colonnes supplementaires definies par l'application

Mapping ligne <-> entite:
-------------------------
Les colonnes reservees (id, user_id, expires_at) deviennent des champs
nommes. Toutes les autres colonnes de la ligne vont dans `attributes`,
sous leur nom de colonne, sans conversion. `to_row()` fait l'operation
inverse pour l'insertion.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping

from session_bridge.domain.exceptions import ReservedAttributeError


SESSION_RESERVED_COLUMNS = ("id", "user_id", "expires_at")


@dataclass
class DatabaseSession:
    """
    Session stockee en base.

    Attributes:
        id: Identifiant unique de la session.
        user_id: Identifiant de l'utilisateur proprietaire.
        expires_at: Date d'expiration.
        attributes: Colonnes additionnelles (jamais de cle reservee).

    Example:
        >>> session = DatabaseSession(
        ...     id="s1",
        ...     user_id="u1",
        ...     expires_at=datetime(2030, 1, 1),
        ...     attributes={"country": "fr"},
        ... )
        >>> session.to_row()["country"]
        'fr'
    """

    id: str
    user_id: Any
    expires_at: datetime
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        reserved = set(self.attributes) & set(SESSION_RESERVED_COLUMNS)
        if reserved:
            raise ReservedAttributeError("DatabaseSession", reserved)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DatabaseSession":
        """
        Construit une session depuis une ligne (cle de colonne -> valeur).

        Args:
            row: Ligne de la table des sessions.

        Returns:
            DatabaseSession avec les colonnes non reservees en attributs.
        """
        attributes = {
            key: value for key, value in row.items()
            if key not in SESSION_RESERVED_COLUMNS
        }
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            expires_at=row["expires_at"],
            attributes=attributes,
        )

    def to_row(self) -> Dict[str, Any]:
        """Valeurs de colonnes pour l'insertion (attributs etales)."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "expires_at": self.expires_at,
            **self.attributes,
        }

    def is_expired(self, now: datetime) -> bool:
        """True si la session est expiree a l'instant `now`."""
        return self.expires_at <= now
