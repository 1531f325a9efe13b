"""
Base Repository

This module provides a generic base repository with common operations.
All entity-specific repositories inherit from this class.

What This Provides:
===================
- get(id)          → Fetch single record by primary key
- count()          → Count records with filtering
- create()         → Create new record
- insert_into()    → Dialect-specific INSERT supporting ON CONFLICT

Generic Type Pattern:
=====================
    class ModRepository(BaseRepository[Mod]):
        pass

    repo = ModRepository(session)
    mod = await repo.get(mod_id)  # Returns Mod, not Any!

flush() vs commit():
====================
Repository methods only ever flush. The refresh pipeline owns the one
transaction of a cycle and commits (or rolls back) it as a whole.

Bulk Statements:
================
Bulk methods of the concrete repositories execute exactly ONE statement per
call. Splitting work into batches that respect the per-statement parameter
limit is the caller's job (see CatalogImporter).
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import Table, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from modrate.shared.core.exceptions import StoreError
from modrate.shared.models.base import Base


# TypeVar bound to Base ensures we only work with SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common operations.

    Type Parameter:
        ModelType: The SQLAlchemy model class this repository manages

    Attributes:
        model: The SQLAlchemy model class
        session: The async database session
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        """
        Initialize the repository.

        Args:
            model: SQLAlchemy model class (e.g., Mod, Category)
            session: Async database session of the current cycle
        """
        self.model = model
        self.session = session

    @property
    def table(self) -> Table:
        """Core table of the model, used for bulk statements."""
        return self.model.__table__

    @property
    def dialect_name(self) -> str:
        return self.session.get_bind().dialect.name

    def insert_into(self, table: Optional[Table] = None) -> Any:
        """
        Build a dialect-specific INSERT for the bound store.

        PostgreSQL and SQLite inserts both offer on_conflict_do_nothing()
        and on_conflict_do_update() with an `excluded` namespace.

        Raises:
            StoreError: If the store dialect has no ON CONFLICT support here
        """
        target = self.table if table is None else table
        if self.dialect_name == "postgresql":
            return postgresql.insert(target)
        if self.dialect_name == "sqlite":
            return sqlite.insert(target)
        raise StoreError(
            f"Unsupported database dialect '{self.dialect_name}'",
            details={"dialect": self.dialect_name},
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: Any) -> Optional[ModelType]:
        """
        Get a single record by its primary key.

        Args:
            record_id: Primary key value

        Returns:
            The model instance if found, None otherwise
        """
        return await self.session.get(self.model, record_id)

    async def count(self, filters: Optional[dict[str, Any]] = None) -> int:
        """
        Count records with optional filtering.

        Args:
            filters: Dict of field=value for WHERE clauses

        Returns:
            Number of matching records

        SQL Generated:
            SELECT COUNT(*) FROM mods
        """
        query = select(sql_count()).select_from(self.model)

        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.where(getattr(self.model, field) == value)

        result = await self.session.execute(query)
        return result.scalar() or 0

    # ═══════════════════════════════════════════════════════════════════════════
    # CREATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Create a new record.

        Adds the instance to the session and flushes to get the generated
        primary key and defaults.

        Args:
            **kwargs: Field values for the new record

        Returns:
            The created model instance with all DB-generated values
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance
