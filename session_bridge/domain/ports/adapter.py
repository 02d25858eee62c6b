"""
Port Adapter - Interface de persistance des sessions et utilisateurs.

Ce port definit le contrat consomme par la librairie d'authentification.
Chaque backend de stockage fournit un adapter qui l'implemente.

Contrat:
--------
- Toutes les operations sont asynchrones et independantes: aucune
  n'attend la fin d'une autre. L'appelant sequence lui-meme si besoin
  (ex: delete puis insert).
- Chaque operation accepte un `schema` optionnel. S'il est fourni, les
  deux tables (sessions et utilisateurs) sont redirigees vers ce schema
  pour la duree de l'appel uniquement.
- Absence != erreur: une lecture sans resultat retourne None / liste
  vide, une mise a jour ou suppression sans cible ne fait rien.
- Les violations de contraintes (id duplique, cle etrangere) remontent
  telles quelles depuis la base.

Usage:
------
    # Dans la librairie d'authentification
    class Auth:
        def __init__(self, adapter: Adapter):
            self.adapter = adapter

        async def validate(self, session_id: str):
            session, user = await self.adapter.get_session_and_user(session_id)
            if session is None:
                return None
            ...
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, List, Optional, Tuple

from session_bridge.domain.entities.session import DatabaseSession
from session_bridge.domain.entities.user import DatabaseUser


class Adapter(ABC):
    """
    Interface de persistance sessions/utilisateurs.

    Implementee par SQLAlchemySessionAdapter.
    """

    @abstractmethod
    async def get_session_and_user(
        self,
        session_id: str,
        schema: Optional[str] = None,
    ) -> Tuple[Optional[DatabaseSession], Optional[DatabaseUser]]:
        """
        Recupere une session et son utilisateur en un seul aller-retour.

        Returns:
            (session, user) si trouve, sinon (None, None).
        """
        ...

    @abstractmethod
    async def get_user_sessions(
        self,
        user_id: Any,
        schema: Optional[str] = None,
    ) -> List[DatabaseSession]:
        """Liste les sessions d'un utilisateur (ordre non garanti)."""
        ...

    @abstractmethod
    async def set_session(
        self,
        session: DatabaseSession,
        schema: Optional[str] = None,
    ) -> None:
        """Insere une session. Echoue si l'id existe deja."""
        ...

    @abstractmethod
    async def update_session_expiration(
        self,
        session_id: str,
        expires_at: datetime,
        schema: Optional[str] = None,
    ) -> None:
        """Met a jour l'expiration. Sans effet si la session n'existe pas."""
        ...

    @abstractmethod
    async def delete_session(
        self,
        session_id: str,
        schema: Optional[str] = None,
    ) -> None:
        """Supprime une session. Sans effet si absente."""
        ...

    @abstractmethod
    async def delete_user_sessions(
        self,
        user_id: Any,
        schema: Optional[str] = None,
    ) -> None:
        """Supprime toutes les sessions d'un utilisateur."""
        ...

    @abstractmethod
    async def delete_expired_sessions(
        self,
        schema: Optional[str] = None,
    ) -> None:
        """Supprime les sessions dont expires_at <= maintenant."""
        ...
