"""
Configuration de l'adapter - Settings Pydantic.

Responsabilite unique:
----------------------
Charger et valider la configuration depuis les variables d'env.

Variables (prefixe SESSION_BRIDGE_):
------------------------------------
- SESSION_BRIDGE_DATABASE_URL: URL SQLAlchemy async (asyncpg, aiosqlite...)
- SESSION_BRIDGE_DEFAULT_SCHEMA: Schema utilise quand un appel n'en donne pas
- SESSION_BRIDGE_USER_TABLE / SESSION_BRIDGE_SESSION_TABLE: Noms des tables
- SESSION_BRIDGE_LOG_LEVEL / SESSION_BRIDGE_JSON_LOGS: Logging
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AdapterSettings(BaseSettings):
    """
    Configuration de l'adapter sessions/utilisateurs.

    Chargee depuis les variables d'environnement et le fichier .env.
    """

    model_config = SettingsConfigDict(
        env_prefix="SESSION_BRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Base de donnees
    database_url: str = "sqlite+aiosqlite:///./sessions.db"
    default_schema: Optional[str] = None
    echo: bool = False
    pool_pre_ping: bool = True

    # Tables
    user_table: str = "auth_user"
    session_table: str = "user_session"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False


@lru_cache
def get_settings() -> AdapterSettings:
    """Retourne la configuration (cached)."""
    return AdapterSettings()
