"""
Session Bridge - Adapter de persistance sessions/utilisateurs.

Structure:
    - domain/: Coeur metier (entites, port Adapter, exceptions)
    - infrastructure/: Adapters (SQLAlchemy async, config, logging)
    - testing: Verification de conformite d'un Adapter
"""

__version__ = "1.1.0"
