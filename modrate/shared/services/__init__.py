"""
Services Package

Business logic of a refresh cycle, free of I/O wiring.

Contents:
=========
- refresh_policy: Decides skip / use cache / fetch for one cycle
- catalog_normalizer: Raw records → ModRecords + category names
- catalog_importer: Batched, parameter-bounded writes into the store
"""

from modrate.shared.services.refresh_policy import RefreshDecision, RefreshPolicy, is_expired
from modrate.shared.services.catalog_normalizer import (
    CatalogNormalizer,
    ModRecord,
    NormalizedCatalog,
    NormalizedMod,
)
from modrate.shared.services.catalog_importer import (
    CatalogImporter,
    ImportResult,
    compute_batch_size,
)

__all__ = [
    "RefreshDecision",
    "RefreshPolicy",
    "is_expired",
    "CatalogNormalizer",
    "ModRecord",
    "NormalizedCatalog",
    "NormalizedMod",
    "CatalogImporter",
    "ImportResult",
    "compute_batch_size",
]
