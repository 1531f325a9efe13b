"""
Catalog Importer Service

Writes a NormalizedCatalog into the store in size-bounded batches.

Batch Sizing:
=============
Every statement binds at most `max_parameters` values:

    batch_size = min(chunk_size, max_parameters // columns_per_row)

    mods          11 columns   →  150 rows per INSERT with the defaults
    categories     1 column
    mod_category   2 columns
    id lookups     1 parameter per id

Write Order:
============
    1. categories     INSERT ... ON CONFLICT (name) DO NOTHING, then reload name → id
    2. mods           INSERT ... ON CONFLICT (id) DO UPDATE SET <all value columns>
    3. mod_category   DELETE links of the imported mods, INSERT the new links

The importer never commits. It runs inside the caller's transaction, so a
failure in any batch discards every earlier batch of the same cycle.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence, TypeVar
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from modrate.config.settings import settings
from modrate.shared.core.exceptions import ConfigurationError, StoreError
from modrate.shared.core.logging import get_logger
from modrate.shared.models.contract import CURRENT_CONTRACT, SchemaContract
from modrate.shared.repositories.category_repository import CategoryRepository
from modrate.shared.repositories.mod_repository import ModRepository
from modrate.shared.services.catalog_normalizer import NormalizedCatalog

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class ImportResult:
    """Counts reported by one import."""

    mods_inserted: int = 0
    mods_updated: int = 0
    categories_created: int = 0
    records_skipped: int = 0


def compute_batch_size(chunk_size: int, columns_per_row: int, max_parameters: int) -> int:
    """
    Rows per statement so that rows * columns never exceeds max_parameters.

    Args:
        chunk_size: Configured upper bound on rows per statement
        columns_per_row: Bound parameters per row
        max_parameters: Store limit on bound parameters per statement

    Returns:
        Positive batch size

    Raises:
        ConfigurationError: If the inputs can't yield a positive batch size
    """
    if chunk_size <= 0:
        raise ConfigurationError(
            f"SQL_CHUNK_SIZE must be positive, got {chunk_size}",
            details={"SQL_CHUNK_SIZE": chunk_size},
        )
    if columns_per_row <= 0:
        raise ConfigurationError(f"columns_per_row must be positive, got {columns_per_row}")

    rows_by_parameters = max_parameters // columns_per_row
    if rows_by_parameters < 1:
        raise ConfigurationError(
            f"SQL_MAX_PARAMETERS={max_parameters} can't fit one row of {columns_per_row} columns",
            details={"SQL_MAX_PARAMETERS": max_parameters, "columns_per_row": columns_per_row},
        )
    return min(chunk_size, rows_by_parameters)


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of at most `size` items."""
    for start in range(0, len(items), size):
        yield items[start : start + size]


class CatalogImporter:
    """
    Persists normalized catalogs with batched, parameter-bounded statements.

    Args:
        session: Session of the surrounding transaction
        contract: Schema contract providing column lists
        chunk_size: Maximum rows per statement (SQL_CHUNK_SIZE)
        max_parameters: Maximum bound parameters per statement
    """

    def __init__(
        self,
        session: AsyncSession,
        contract: SchemaContract = CURRENT_CONTRACT,
        chunk_size: int = settings.SQL_CHUNK_SIZE,
        max_parameters: int = settings.SQL_MAX_PARAMETERS,
    ) -> None:
        self.session = session
        self.contract = contract
        self.categories = CategoryRepository(session)
        self.mods = ModRepository(session)

        self.mod_columns = contract.mods.insert_columns
        self.mod_value_columns = contract.mods.value_columns
        self.mod_batch_size = compute_batch_size(chunk_size, len(self.mod_columns), max_parameters)
        self.category_batch_size = compute_batch_size(
            chunk_size, len(contract.categories.insert_columns), max_parameters
        )
        self.link_batch_size = compute_batch_size(
            chunk_size, len(contract.mod_category.insert_columns), max_parameters
        )
        self.id_batch_size = compute_batch_size(chunk_size, 1, max_parameters)

    async def import_catalog(self, catalog: NormalizedCatalog) -> ImportResult:
        """
        Write categories, mods and links of a normalized catalog.

        Args:
            catalog: Normalizer output

        Returns:
            ImportResult with inserted/updated/created/skipped counts

        Raises:
            StoreError: On any database failure or a category without an id;
                the caller must roll back
        """
        result = ImportResult(records_skipped=catalog.skipped)

        try:
            result.categories_created = await self._write_categories(catalog.new_categories)
            category_ids = await self.categories.get_id_map()

            inserted, updated = await self._write_mods(catalog)
            result.mods_inserted, result.mods_updated = inserted, updated

            await self._write_links(catalog, category_ids)
        except SQLAlchemyError as e:
            logger.error("Catalog import failed", error=str(e))
            raise StoreError(
                f"Catalog import failed: {e}",
                details={"exception": type(e).__name__},
            ) from e

        logger.info(
            "Catalog import written",
            mods_inserted=result.mods_inserted,
            mods_updated=result.mods_updated,
            categories_created=result.categories_created,
            records_skipped=result.records_skipped,
        )
        return result

    async def _write_categories(self, names: Sequence[str]) -> int:
        if not names:
            return 0

        before = await self.categories.count()
        for batch in chunked(list(names), self.category_batch_size):
            await self.categories.insert_names(batch)
        after = await self.categories.count()

        logger.debug("Categories written", requested=len(names), created=after - before)
        return after - before

    async def _write_mods(self, catalog: NormalizedCatalog) -> tuple[int, int]:
        entries = catalog.mods
        batches = list(chunked(entries, self.mod_batch_size))
        inserted = updated = 0

        for index, batch in enumerate(batches, start=1):
            ids = [entry.mod.id for entry in batch]
            existing = await self.mods.existing_ids(ids)
            rows = [entry.mod.to_row(self.mod_columns) for entry in batch]
            await self.mods.upsert(rows, self.mod_value_columns)

            updated += len(existing)
            inserted += len(batch) - len(existing)
            logger.debug("Mods batch written", batch=index, batches=len(batches), rows=len(batch))

        return inserted, updated

    async def _write_links(self, catalog: NormalizedCatalog, category_ids: dict[str, int]) -> None:
        mod_ids: list[UUID] = [entry.mod.id for entry in catalog.mods]
        for batch in chunked(mod_ids, self.id_batch_size):
            await self.mods.delete_links(batch)

        links = []
        for entry in catalog.mods:
            for name in sorted(entry.categories):
                category_id = category_ids.get(name)
                if category_id is None:
                    # only possible if a category vanished mid-transaction
                    raise StoreError(
                        f"Can't find category id for '{name}'",
                        details={"mod_id": str(entry.mod.id), "category": name},
                    )
                links.append({"mod_id": entry.mod.id, "category_id": category_id})

        batches = list(chunked(links, self.link_batch_size))
        for index, batch in enumerate(batches, start=1):
            await self.mods.insert_links(batch)
            logger.debug("Links batch written", batch=index, batches=len(batches), rows=len(batch))
