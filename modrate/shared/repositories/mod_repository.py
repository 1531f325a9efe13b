"""
Mod Repository

Database operations specific to the Mod model and its category links.

Common Operations:
==================
- existing_ids()     → Which of the given ids are already stored
- upsert()           → Insert-or-replace one batch of mod rows
- delete_links()     → Drop category links of some mods
- insert_links()     → Insert one batch of category links
- list_mods()        → Browse query (category/deprecated/nsfw filters)
- categories_for()   → Category names of one mod

Each bulk method runs a single parameterized statement. The importer sizes
the batches it passes in.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from modrate.shared.repositories.base import BaseRepository
from modrate.shared.models.category import Category
from modrate.shared.models.mod import Mod
from modrate.shared.models.mod_category import ModCategory
from modrate.shared.models.rating import ModRating


@dataclass
class ModQueryOptions:
    """
    Filters for browsing mods.

    Attributes:
        ignored_categories: Leave out mods listed under any of these names
        limit: Maximum number of mods returned
        include_deprecated: Keep deprecated mods
        include_nsfw: Keep NSFW mods
        unrated_by: Leave out mods this user id has already rated
    """

    ignored_categories: set[str] = field(default_factory=set)
    limit: int = 20
    include_deprecated: bool = False
    include_nsfw: bool = False
    unrated_by: Optional[int] = None


class ModRepository(BaseRepository[Mod]):
    """
    Repository for Mod database operations.

    Handles the bulk writes of the catalog importer and the browse query
    used by the rating pages.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Mod, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # BULK WRITES
    # ═══════════════════════════════════════════════════════════════════════════

    async def existing_ids(self, ids: Sequence[UUID]) -> set[UUID]:
        """
        Return the subset of ids already present in the mods table.

        SQL Generated:
            SELECT mods.id FROM mods WHERE mods.id IN (?, ?, ...)
        """
        if not ids:
            return set()

        result = await self.session.execute(select(Mod.id).where(Mod.id.in_(ids)))
        return set(result.scalars().all())

    async def upsert(self, rows: Sequence[dict[str, Any]], value_columns: Sequence[str]) -> None:
        """
        Insert a batch of mods, replacing every value column of existing ones.

        Args:
            rows: Column → value dicts, one per mod
            value_columns: Non-key columns overwritten on conflict

        SQL Generated:
            INSERT INTO mods (id, name, ...) VALUES (...), (...)
            ON CONFLICT (id) DO UPDATE SET name = excluded.name, ...
        """
        if not rows:
            return

        stmt = self.insert_into().values(list(rows))
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={column: stmt.excluded[column] for column in value_columns},
        )
        await self.session.execute(stmt)

    async def delete_links(self, mod_ids: Sequence[UUID]) -> None:
        """
        Remove all category links of the given mods.

        SQL Generated:
            DELETE FROM mod_category WHERE mod_category.mod_id IN (?, ?, ...)
        """
        if not mod_ids:
            return

        links = ModCategory.__table__
        await self.session.execute(delete(links).where(links.c.mod_id.in_(mod_ids)))

    async def insert_links(self, rows: Sequence[dict[str, Any]]) -> None:
        """
        Insert a batch of (mod_id, category_id) links.

        SQL Generated:
            INSERT INTO mod_category (mod_id, category_id) VALUES (?, ?), ...
            ON CONFLICT (mod_id, category_id) DO NOTHING
        """
        if not rows:
            return

        stmt = self.insert_into(ModCategory.__table__).values(list(rows))
        await self.session.execute(
            stmt.on_conflict_do_nothing(index_elements=["mod_id", "category_id"])
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # QUERIES
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_mods(self, options: ModQueryOptions) -> list[Mod]:
        """
        Browse mods, most recently updated first.

        Args:
            options: Filters and limit

        Returns:
            Matching mods

        SQL Generated:
            SELECT ... FROM mods
            WHERE mods.id NOT IN (SELECT mod_id FROM mod_category JOIN categories ...
                                  WHERE categories.name IN (...))
              AND mods.deprecated IS false AND mods.nsfw IS false
            ORDER BY mods.updated_date DESC
            LIMIT ?
        """
        query = select(Mod)

        if options.ignored_categories:
            ignored = (
                select(ModCategory.mod_id)
                .join(Category, Category.id == ModCategory.category_id)
                .where(Category.name.in_(sorted(options.ignored_categories)))
            )
            query = query.where(Mod.id.not_in(ignored))

        if not options.include_deprecated:
            query = query.where(Mod.deprecated.is_(False))

        if not options.include_nsfw:
            query = query.where(Mod.nsfw.is_(False))

        if options.unrated_by is not None:
            rated = exists().where(
                and_(ModRating.mod_id == Mod.id, ModRating.user_id == options.unrated_by)
            )
            query = query.where(~rated)

        query = query.order_by(Mod.updated_date.desc(), Mod.name).limit(options.limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def categories_for(self, mod_id: UUID) -> list[str]:
        """Get the sorted category names a mod is listed under."""
        result = await self.session.execute(
            select(Category.name)
            .join(ModCategory, ModCategory.category_id == Category.id)
            .where(ModCategory.mod_id == mod_id)
            .order_by(Category.name)
        )
        return list(result.scalars().all())
