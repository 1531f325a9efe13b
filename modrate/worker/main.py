"""
Catalog Refresh Worker Entry Point

Runs one refresh cycle and exits. Scheduling (cron, systemd timer, k8s
CronJob) is left to the deployment.

Lifecycle:
==========
1. Settings loaded, MOD_REFRESH resolved to a canonical mode
2. Database connection verified (optionally schema created)
3. One cycle: decide → fetch or read cache → normalize → import
4. Database connections closed
5. Exit code 0 on success, 1 on any cycle failure

Usage:
======
    python -m modrate.worker.main
    python -m modrate.worker.main --force          # re-download now
    python -m modrate.worker.main --create-schema  # throwaway SQLite stores
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from modrate.config.refresh import load_refresh_options
from modrate.config.settings import Settings, settings
from modrate.shared.adapters.cache_store import FileCacheStore
from modrate.shared.adapters.catalog_client import CatalogClient
from modrate.shared.core.exceptions import ModRateException
from modrate.shared.core.logging import logger
from modrate.shared.db import (
    close_db,
    create_engine_from_settings,
    create_schema,
    create_session_factory,
    init_db,
)
from modrate.worker.pipelines.catalog_refresh_pipeline import (
    CatalogRefreshPipeline,
    CatalogRefreshService,
    CycleResult,
)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="modrate-refresh",
        description="Refresh the local mod catalog mirror",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Download the catalog even if the cache has not expired",
    )
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create missing tables from the ORM models before importing",
    )
    return parser.parse_args(argv)


async def run_worker(config: Settings, force: bool = False, create: bool = False) -> CycleResult:
    """
    Run one refresh cycle against the configured store.

    Raises:
        ModRateException: If the cycle fails
    """
    options = load_refresh_options(config)

    logger.info(
        "Starting catalog refresh",
        app_name=config.APP_NAME,
        environment=config.APP_ENV,
        mode=options.mode.value,
    )

    db_engine = create_engine_from_settings(config)
    try:
        await init_db(db_engine)
        if create:
            await create_schema(db_engine)

        pipeline = CatalogRefreshPipeline(
            session_factory=create_session_factory(db_engine),
            cache=FileCacheStore(config.MOD_CACHE_FILE),
            client=CatalogClient(config.MOD_CATALOG_URL),
            options=options,
            chunk_size=config.SQL_CHUNK_SIZE,
            max_parameters=config.SQL_MAX_PARAMETERS,
        )
        service = CatalogRefreshService(pipeline)
        if force:
            service.request_import()
            result = await service.run_pending()
        else:
            result = await service.run_cycle()
        return result
    finally:
        await close_db(db_engine)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        result = asyncio.run(run_worker(settings, force=args.force, create=args.create_schema))
    except ModRateException as e:
        logger.error("Catalog refresh failed", **e.to_dict()["error"])
        return 1

    logger.info(
        "Catalog refresh complete",
        decision=result.decision.value,
        imported=result.imported,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
