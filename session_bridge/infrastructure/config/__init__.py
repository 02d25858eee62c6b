"""Configuration de l'adapter (pydantic-settings)."""

from session_bridge.infrastructure.config.settings import AdapterSettings, get_settings

__all__ = ["AdapterSettings", "get_settings"]
