"""Refresh cycle orchestration."""

from modrate.worker.pipelines.catalog_refresh_pipeline import (
    CatalogRefreshPipeline,
    CatalogRefreshService,
    CycleResult,
    ImportStatus,
)

__all__ = [
    "CatalogRefreshPipeline",
    "CatalogRefreshService",
    "CycleResult",
    "ImportStatus",
]
