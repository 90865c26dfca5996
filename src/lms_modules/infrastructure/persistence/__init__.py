"""Persistence layer: SQLAlchemy models, repositories and database lifecycle."""
