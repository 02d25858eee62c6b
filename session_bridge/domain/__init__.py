"""
Domain Layer - Contrat de persistance des sessions.

Ce module contient:
    - entities/: Enregistrements DatabaseSession et DatabaseUser
    - ports/: Interface Adapter consommee par la librairie d'authentification
    - exceptions: Exceptions metier

Principes:
    - AUCUNE dependance vers les couches externes (pas de SQLAlchemy ici)
    - Testable sans infrastructure
"""

from session_bridge.domain.exceptions import (
    DomainException,
    InvalidSchemaNameError,
    InvalidTableError,
    ReservedAttributeError,
)

__all__ = [
    "DomainException",
    "ReservedAttributeError",
    "InvalidTableError",
    "InvalidSchemaNameError",
]
