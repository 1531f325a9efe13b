"""
Category Repository

Database operations specific to the Category model.

Common Operations:
==================
- get_names()     → All known category names (for reuse matching)
- get_id_map()    → name → id for link building
- insert_names()  → Insert names, ignoring ones that already exist
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from modrate.shared.repositories.base import BaseRepository
from modrate.shared.models.category import Category


class CategoryRepository(BaseRepository[Category]):
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Category, session)

    async def get_names(self) -> set[str]:
        """Get the names of all stored categories."""
        result = await self.session.execute(select(Category.name))
        return set(result.scalars().all())

    async def get_id_map(self) -> dict[str, int]:
        """
        Map every stored category name to its id.

        SQL Generated:
            SELECT categories.id, categories.name FROM categories
        """
        result = await self.session.execute(select(Category.id, Category.name))
        return {name: category_id for category_id, name in result.all()}

    async def insert_names(self, names: Sequence[str]) -> None:
        """
        Insert category names in one statement.

        Names that already exist are left alone, so concurrent or repeated
        imports never create a second row for the same name.

        SQL Generated:
            INSERT INTO categories (name) VALUES (?), (?), ...
            ON CONFLICT (name) DO NOTHING
        """
        if not names:
            return

        stmt = self.insert_into().values([{"name": name} for name in names])
        await self.session.execute(stmt.on_conflict_do_nothing(index_elements=["name"]))
