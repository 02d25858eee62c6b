"""
Ports du domaine.

Interfaces implementees par la couche infrastructure.
"""

from session_bridge.domain.ports.adapter import Adapter

__all__ = ["Adapter"]
