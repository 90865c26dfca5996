"""Infrastructure layer - storage and serialization.

This layer contains all external dependencies including:
- Database adapters (SQLAlchemy async, Alembic migrations)
- Serialization schemas (Pydantic)
"""
