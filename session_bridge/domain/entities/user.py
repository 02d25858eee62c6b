"""
Entite DatabaseUser - Utilisateur tel que lu par l'adapter.

L'adapter ne cree, ne modifie et ne supprime jamais d'utilisateur:
le cycle de vie de la table des utilisateurs appartient a l'application.
Cet enregistrement n'est produit que par la jointure session -> utilisateur.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from session_bridge.domain.exceptions import ReservedAttributeError


USER_RESERVED_COLUMNS = ("id",)


@dataclass
class DatabaseUser:
    """
    Utilisateur stocke en base.

    Attributes:
        id: Identifiant opaque de l'utilisateur.
        attributes: Toutes les autres colonnes de la ligne.
    """

    id: Any
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        reserved = set(self.attributes) & set(USER_RESERVED_COLUMNS)
        if reserved:
            raise ReservedAttributeError("DatabaseUser", reserved)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DatabaseUser":
        """Construit un utilisateur depuis une ligne de la table."""
        attributes = {
            key: value for key, value in row.items()
            if key not in USER_RESERVED_COLUMNS
        }
        return cls(id=row["id"], attributes=attributes)
