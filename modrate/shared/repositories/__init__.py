"""
Repository Pattern Implementations

Repositories encapsulate database queries and provide a clean API for data
access.

Repository Hierarchy:
=====================
    BaseRepository[ModelType]            ← Generic operations + dialect INSERT
         │
         ├── CategoryRepository          ← Name lookups, insert-if-missing
         ├── ModRepository               ← Batched upserts, links, browse query
         ├── RatingRepository            ← Per-user ratings via RatingCodec
         └── CatalogImportRepository     ← Import audit rows

Usage Example:
==============
    from modrate.shared.repositories import ModRepository, ModQueryOptions

    async def next_mods(session: AsyncSession, user_id: int):
        repo = ModRepository(session)
        return await repo.list_mods(ModQueryOptions(limit=1, unrated_by=user_id))
"""

from modrate.shared.repositories.base import BaseRepository
from modrate.shared.repositories.category_repository import CategoryRepository
from modrate.shared.repositories.mod_repository import ModQueryOptions, ModRepository
from modrate.shared.repositories.rating_repository import RatingRepository
from modrate.shared.repositories.catalog_import_repository import CatalogImportRepository

__all__ = [
    # Base class
    "BaseRepository",
    # Entity-specific repositories
    "CategoryRepository",
    "ModRepository",
    "ModQueryOptions",
    "RatingRepository",
    "CatalogImportRepository",
]
