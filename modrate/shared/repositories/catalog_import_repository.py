"""
CatalogImport Repository

Audit rows of committed refresh cycles and the "last imported at" lookup.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from modrate.shared.repositories.base import BaseRepository
from modrate.shared.models.catalog_import import CatalogImport
from modrate.shared.models.enums import CatalogSource


class CatalogImportRepository(BaseRepository[CatalogImport]):
    """Repository for CatalogImport database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(CatalogImport, session)

    async def record(
        self,
        imported_at: datetime,
        source: CatalogSource,
        mods_inserted: int,
        mods_updated: int,
        categories_created: int,
        records_skipped: int,
    ) -> CatalogImport:
        """Add the audit row of the current cycle (flushed, not committed)."""
        return await self.create(
            imported_at=imported_at,
            source=source.value,
            mods_inserted=mods_inserted,
            mods_updated=mods_updated,
            categories_created=categories_created,
            records_skipped=records_skipped,
        )

    async def latest_import_date(self) -> Optional[datetime]:
        """
        Get the time of the most recent committed import.

        SQLite hands back naive datetimes; they are stored as UTC, so the
        tzinfo is restored here.

        Returns:
            Aware UTC datetime, or None if nothing was ever imported
        """
        result = await self.session.execute(select(func.max(CatalogImport.imported_at)))
        latest = result.scalar_one_or_none()
        if latest is None:
            return None
        if isinstance(latest, str):
            latest = datetime.fromisoformat(latest)
        if latest.tzinfo is None:
            latest = latest.replace(tzinfo=timezone.utc)
        return latest
