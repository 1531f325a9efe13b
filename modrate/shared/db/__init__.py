"""
Database Module

Database connectivity and session management.

Usage:
======
    from modrate.shared.db import transactional_session, AsyncSessionLocal

    async with transactional_session(AsyncSessionLocal) as session:
        repo = ModRepository(session)
        mods = await repo.list_mods(ModQueryOptions(limit=10))
"""

from modrate.shared.db.session import (
    AsyncSessionLocal,
    close_db,
    create_engine_from_settings,
    create_schema,
    create_session_factory,
    enable_sqlite_foreign_keys,
    engine,
    init_db,
    transactional_session,
)

__all__ = [
    "AsyncSessionLocal",  # Session factory for the configured store
    "close_db",  # Dispose of the engine on shutdown
    "create_engine_from_settings",  # Engine for arbitrary settings
    "create_schema",  # Create tables from ORM metadata
    "create_session_factory",  # Session factory for arbitrary engines
    "enable_sqlite_foreign_keys",  # PRAGMA foreign_keys=ON listener
    "engine",  # Engine for the configured store
    "init_db",  # Verify connectivity on startup
    "transactional_session",  # Commit/rollback unit of work
]
