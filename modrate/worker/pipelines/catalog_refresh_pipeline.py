"""
Catalog refresh pipeline.
Orchestrates decide -> acquire snapshot -> normalize -> import.

Pipeline Stages:
1. DECIDE: RefreshPolicy picks SKIP / USE_CACHE / FETCH_REMOTE
2. ACQUIRE: download (and overwrite the cache) or read the cache
3. NORMALIZE: raw records → ModRecords, malformed entries skipped
4. IMPORT: batched upserts + CatalogImport row, ONE transaction

Failure Semantics:
- A fetch failure happens before any cache or store mutation
- A downloaded snapshot is cached before normalization, so an import
  failure never loses it
- Any store failure rolls the whole cycle back: no mods, no links and no
  CatalogImport row of that cycle become visible
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Optional
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...config.refresh import RefreshOptions
from ...config.settings import settings
from ...shared.adapters.cache_store import CacheStore
from ...shared.adapters.catalog_client import CatalogClient
from ...shared.core.exceptions import CacheError, ModRateException, StoreError, TransportError
from ...shared.core.logging import cycle_context, get_logger
from ...shared.db.session import transactional_session
from ...shared.models import Base, CatalogSource
from ...shared.models.contract import CURRENT_CONTRACT, SchemaContract
from ...shared.repositories.catalog_import_repository import CatalogImportRepository
from ...shared.repositories.category_repository import CategoryRepository
from ...shared.schemas.catalog import RawSnapshot, decode_records
from ...shared.services.catalog_importer import CatalogImporter, ImportResult
from ...shared.services.catalog_normalizer import CatalogNormalizer
from ...shared.services.refresh_policy import RefreshDecision, RefreshPolicy

logger = get_logger(__name__)


@dataclass
class CycleResult:
    """Result of one refresh cycle."""

    decision: RefreshDecision
    source: Optional[CatalogSource] = None
    result: Optional[ImportResult] = None

    @property
    def imported(self) -> bool:
        return self.result is not None


class CatalogRefreshPipeline:
    """
    One refresh cycle of the catalog mirror.

    Collaborators are passed in explicitly: the cache handle, the remote
    client and the session factory. Nothing here reaches for globals except
    the batch size defaults.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: CacheStore,
        client: CatalogClient,
        options: RefreshOptions,
        chunk_size: int = settings.SQL_CHUNK_SIZE,
        max_parameters: int = settings.SQL_MAX_PARAMETERS,
        contract: SchemaContract = CURRENT_CONTRACT,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        contract.verify(Base.metadata)

        self.session_factory = session_factory
        self.cache = cache
        self.client = client
        self.options = options
        self.chunk_size = chunk_size
        self.max_parameters = max_parameters
        self.contract = contract
        self.policy = RefreshPolicy(options)
        self.normalizer = CatalogNormalizer(contract)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def run(self, force: bool = False) -> CycleResult:
        """
        Run one refresh cycle.

        Args:
            force: Re-download even if the cache has not expired yet

        Returns:
            CycleResult with the decision and, unless skipped, import counts

        Raises:
            ConfigurationError, TransportError, CacheError, StoreError
        """
        with cycle_context(cycle_id=uuid4().hex[:12], mode=self.options.mode.value):
            try:
                return await self._run(force)
            except ModRateException as e:
                logger.error(
                    "Refresh cycle failed",
                    error_code=e.error_code,
                    error=e.message,
                    details=e.details,
                )
                raise
            except Exception:
                logger.exception("Refresh cycle failed unexpectedly")
                raise

    async def _run(self, force: bool) -> CycleResult:
        now = self._clock()
        cache_exists = self.cache.exists()
        decision = self.policy.decide(
            cache_exists=cache_exists,
            cache_modified_at=self.cache.last_modified() if cache_exists else None,
            now=now,
            force=force,
        )
        logger.info("Refresh decision made", decision=decision.value, force=force)

        if decision is RefreshDecision.SKIP:
            return CycleResult(decision=decision)

        snapshot, records = await self._acquire(decision, now)
        result = await self._import(snapshot, records)

        logger.info(
            "Refresh cycle finished",
            source=snapshot.source.value,
            mods_inserted=result.mods_inserted,
            mods_updated=result.mods_updated,
            categories_created=result.categories_created,
            records_skipped=result.records_skipped,
        )
        return CycleResult(decision=decision, source=snapshot.source, result=result)

    async def _acquire(
        self, decision: RefreshDecision, now: datetime
    ) -> tuple[RawSnapshot, list[Any]]:
        """Get the snapshot this cycle imports, plus its decoded records."""
        if decision is RefreshDecision.FETCH_REMOTE:
            snapshot = await self.client.fetch()
            # cached before import starts
            self.cache.write(snapshot.payload)
            logger.info("Catalog snapshot cached", size_bytes=snapshot.size_bytes)
            records = snapshot.records
            if records is None:
                records = decode_records(snapshot.payload, TransportError)
            return snapshot, records

        payload = self.cache.read()
        snapshot = RawSnapshot(
            payload=payload,
            fetched_at=self.cache.last_modified() or now,
            source=CatalogSource.CACHE,
        )
        logger.info("Using cached catalog snapshot", size_bytes=snapshot.size_bytes)
        return snapshot, decode_records(payload, CacheError)

    async def _import(self, snapshot: RawSnapshot, records: list[Any]) -> ImportResult:
        try:
            async with transactional_session(self.session_factory) as session:
                existing = await CategoryRepository(session).get_names()
                normalized = self.normalizer.normalize(records, existing)

                importer = CatalogImporter(
                    session,
                    contract=self.contract,
                    chunk_size=self.chunk_size,
                    max_parameters=self.max_parameters,
                )
                result = await importer.import_catalog(normalized)

                await CatalogImportRepository(session).record(
                    imported_at=self._clock(),
                    source=snapshot.source,
                    mods_inserted=result.mods_inserted,
                    mods_updated=result.mods_updated,
                    categories_created=result.categories_created,
                    records_skipped=result.records_skipped,
                )
        except SQLAlchemyError as e:
            raise StoreError(
                f"Catalog import transaction failed: {e}",
                details={"exception": type(e).__name__},
            ) from e
        return result


# ═══════════════════════════════════════════════════════════════════════════════
# IMPORT STATUS
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class ImportStatus:
    """
    Operator-visible state of the refresh worker.

    Attributes:
        import_requested: An explicit re-import is waiting to run
        import_in_progress: A cycle is running right now
        last_result: Outcome of the last finished cycle
        last_error: error_code of the last failed cycle
    """

    import_requested: bool = False
    import_in_progress: bool = False
    last_result: Optional[CycleResult] = None
    last_error: Optional[str] = None


class CatalogRefreshService:
    """
    Runs refresh cycles one at a time within a process.

    Cycles started concurrently wait on an asyncio.Lock instead of
    interleaving; the single import transaction serializes writers across
    processes.
    """

    def __init__(self, pipeline: CatalogRefreshPipeline):
        self.pipeline = pipeline
        self.status = ImportStatus()
        self._lock = asyncio.Lock()

    def request_import(self) -> None:
        """Ask for a forced cycle on the next run_pending() call."""
        self.status.import_requested = True
        logger.info("Catalog import requested")

    async def run_pending(self) -> Optional[CycleResult]:
        """Run a forced cycle if one was requested, else do nothing."""
        if not self.status.import_requested:
            return None
        return await self.run_cycle(force=True)

    async def run_cycle(self, force: bool = False) -> CycleResult:
        """
        Run one cycle under the service lock.

        Raises:
            Whatever the pipeline raises; the status records the failure
        """
        async with self._lock:
            self.status.import_in_progress = True
            if force:
                self.status.import_requested = False
            try:
                result = await self.pipeline.run(force=force)
            except ModRateException as e:
                self.status.last_error = e.error_code
                raise
            finally:
                self.status.import_in_progress = False

            self.status.last_result = result
            self.status.last_error = None
            return result
