"""
Infrastructure Layer - Adapters vers l'exterieur.

    - persistence/: Adapter SQLAlchemy async, tables, DatabaseManager
    - config/: Settings pydantic
    - logging/: structlog
    - container: Assemblage settings -> engine -> adapter
"""
