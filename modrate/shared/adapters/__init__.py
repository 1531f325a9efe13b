"""
Adapters Package

External resource integrations.

Contents:
=========
- catalog_client: Registry package listing over HTTP (httpx)
- cache_store: Last fetched snapshot on disk or in memory

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from modrate.shared.adapters.catalog_client import CatalogClient
    from modrate.shared.adapters.cache_store import FileCacheStore
"""
