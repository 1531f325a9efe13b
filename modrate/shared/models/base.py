"""
Base Model Classes

This module provides the declarative base for all SQLAlchemy models.

Column types are chosen to work on both supported stores:
- Uuid      → native UUID on PostgreSQL, CHAR(32) on SQLite
- Date      → DATE on PostgreSQL, ISO string on SQLite
- Enum      → native enum type on PostgreSQL, VARCHAR + CHECK on SQLite

Usage:
======
    from modrate.shared.models.base import Base

    class Category(Base):
        __tablename__ = "categories"
        id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
        name: Mapped[str] = mapped_column(Text, unique=True)
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase


# Deterministic constraint names so Alembic revisions can refer to them
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    All models in the application inherit from this class. Its metadata is
    what the schema contract is verified against.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
