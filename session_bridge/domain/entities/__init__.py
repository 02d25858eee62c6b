"""
Entites du domaine.

Enregistrements echanges entre la librairie d'authentification
et la base de donnees:
    - DatabaseSession: Session avec expiration et attributs
    - DatabaseUser: Utilisateur proprietaire d'une session
"""

from session_bridge.domain.entities.session import (
    SESSION_RESERVED_COLUMNS,
    DatabaseSession,
)
from session_bridge.domain.entities.user import USER_RESERVED_COLUMNS, DatabaseUser

__all__ = [
    "DatabaseSession",
    "DatabaseUser",
    "SESSION_RESERVED_COLUMNS",
    "USER_RESERVED_COLUMNS",
]
