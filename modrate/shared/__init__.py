"""
Shared Module

Contains code used by the refresh worker and by anything reading the mirror:
- Models: SQLAlchemy ORM models and the schema contract
- Repositories: Data access layer
- Services: Refresh policy, normalizer, importer
- Schemas: Pydantic models of the raw catalog
- Core: Logging, exceptions
- Adapters: Catalog client, cache store

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    ├── adapters/       ← External resources
    └── migrations/     ← Alembic revisions

Usage:
======
    from modrate.shared.models import Mod, Category
    from modrate.shared.repositories import ModRepository
    from modrate.shared.services import CatalogNormalizer
    from modrate.shared.core import logger, ModRateException
"""
