"""
Exceptions metier du domaine.

Ces exceptions representent des violations du contrat de l'adapter
et sont independantes de l'infrastructure.

Les erreurs de la base (contrainte d'unicite, cle etrangere, erreurs
transitoires) ne sont PAS traduites ici: elles remontent telles quelles
depuis SQLAlchemy jusqu'a l'appelant.
"""

from typing import Any, Iterable


class DomainException(Exception):
    """Exception de base pour toutes les erreurs du domaine."""

    def __init__(self, message: str, code: str | None = None) -> None:
        """
        Initialise une exception du domaine.

        Args:
            message: Message d'erreur descriptif.
            code: Code d'erreur optionnel pour identification programmatique.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ReservedAttributeError(DomainException):
    """Leve quand des attributs utilisent un nom de colonne reserve."""

    def __init__(self, record: str, keys: Iterable[str]) -> None:
        self.keys = tuple(sorted(keys))
        super().__init__(
            f"Attributs reserves dans {record}: {', '.join(self.keys)}. "
            "Ces colonnes sont des champs nommes, pas des attributs.",
            code="RESERVED_ATTRIBUTE"
        )
        self.record = record


class InvalidTableError(DomainException):
    """Leve quand une table ne possede pas les colonnes requises."""

    def __init__(self, table_name: str, missing: Iterable[str]) -> None:
        self.missing = tuple(sorted(missing))
        super().__init__(
            f"Table '{table_name}' invalide: colonnes manquantes "
            f"{', '.join(self.missing)}",
            code="INVALID_TABLE"
        )
        self.table_name = table_name


class InvalidSchemaNameError(DomainException):
    """Leve quand un nom de schema est vide ou n'est pas une chaine."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Nom de schema invalide: {value!r}. "
            "Le schema doit etre une chaine non vide.",
            code="INVALID_SCHEMA"
        )
        self.invalid_value = value
