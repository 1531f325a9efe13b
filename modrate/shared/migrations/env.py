# pylint: skip-file
# ruff: noqa
"""
Alembic environment for the catalog mirror.

The URL comes from DATABASE_URL, so `alembic upgrade head` migrates whichever
store the worker is configured for (asyncpg or aiosqlite). A Config that
already carries sqlalchemy.url keeps it.

    alembic upgrade head                 # apply to the configured store
    alembic upgrade head --sql > up.sql  # offline, PostgreSQL/SQLite script

Tables the ORM no longer maps (legacy_ratings, kept by revision 003) are
left out of autogenerate comparisons so they are never proposed for DROP.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context

from modrate.config.settings import settings
from modrate.shared.models import Base, CURRENT_CONTRACT

UNMAPPED_TABLES = frozenset({"legacy_ratings"})

config = context.config
if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

CURRENT_CONTRACT.verify(Base.metadata)
target_metadata = Base.metadata


def include_object(obj, name, type_, reflected, compare_to) -> bool:
    return not (type_ == "table" and name in UNMAPPED_TABLES)


def _configure_options(dialect_name: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "include_object": include_object,
        # SQLite rebuilds tables instead of ALTERing constraints
        "render_as_batch": dialect_name == "sqlite",
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    url = config.get_main_option("sqlalchemy.url")
    dialect_name = url.split(":", 1)[0].split("+", 1)[0]
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_options(dialect_name),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        compare_type=True,
        **_configure_options(connection.dialect.name),
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run the revisions over an async connection of the configured store."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
