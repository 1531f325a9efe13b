"""Tests that build a store with the Alembic revisions instead of create_all."""

import asyncio
import uuid
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio
from alembic import command
from alembic.config import Config
from sqlalchemy import MetaData, func, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import create_async_engine

import modrate
from modrate.config.refresh import RefreshMode, RefreshOptions
from modrate.shared.adapters.cache_store import MemoryCacheStore
from modrate.shared.adapters.catalog_client import CatalogClient
from modrate.shared.db.session import (
    create_session_factory,
    enable_sqlite_foreign_keys,
    transactional_session,
)
from modrate.shared.models import ModCategory, Rating, User
from modrate.shared.models.contract import CURRENT_CONTRACT
from modrate.shared.repositories import ModRepository, RatingRepository
from modrate.shared.services.refresh_policy import RefreshDecision
from modrate.worker.pipelines.catalog_refresh_pipeline import CatalogRefreshPipeline

MIGRATIONS = Path(modrate.__file__).parent / "shared" / "migrations"
NOW = datetime(2025, 3, 22, 12, 0, 0, tzinfo=timezone.utc)


def alembic_config(url: str) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS))
    config.set_main_option("sqlalchemy.url", url)
    return config


async def run_alembic(action, config: Config, revision: str) -> None:
    # env.py starts its own event loop
    await asyncio.to_thread(action, config, revision)


async def reflect(engine) -> MetaData:
    metadata = MetaData()
    async with engine.connect() as conn:
        await conn.run_sync(lambda sync_conn: metadata.reflect(bind=sync_conn))
    return metadata


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'modrate.db'}"


@pytest_asyncio.fixture
async def migrated_engine(database_url):
    """File-backed SQLite store upgraded to the head revision."""
    await run_alembic(command.upgrade, alembic_config(database_url), "head")
    engine = create_async_engine(database_url)
    enable_sqlite_foreign_keys(engine)
    yield engine
    await engine.dispose()


class TestUpgrade:
    @pytest.mark.asyncio
    async def test_head_matches_current_contract(self, migrated_engine):
        metadata = await reflect(migrated_engine)

        assert CURRENT_CONTRACT.mismatches(metadata, reflected=True) == []

    @pytest.mark.asyncio
    async def test_sqlite_storage_types_need_reflected_mode(self, migrated_engine):
        metadata = await reflect(migrated_engine)

        assert "column 'mods.id' is CHAR, expected uuid" in CURRENT_CONTRACT.mismatches(metadata)

    @pytest.mark.asyncio
    async def test_mod_ratings_kept_as_legacy_table(self, migrated_engine):
        metadata = await reflect(migrated_engine)

        legacy = metadata.tables["legacy_ratings"]
        assert set(legacy.columns.keys()) == {"mod_id", "rating"}
        assert [column.name for column in legacy.primary_key] == ["mod_id"]
        assert set(metadata.tables["ratings"].columns.keys()) == {"mod_id", "user_id", "rating"}

    @pytest.mark.asyncio
    async def test_version_at_head(self, migrated_engine):
        async with migrated_engine.connect() as conn:
            version = await conn.scalar(text("SELECT version_num FROM alembic_version"))

        assert version == "004"


class TestMigratedStore:
    @pytest.mark.asyncio
    async def test_cache_cycles_import_then_update(self, migrated_engine, make_record, make_payload):
        session_factory = create_session_factory(migrated_engine)
        payload = make_payload([make_record(categories=["Suits", "Misc"]) for _ in range(5)])
        pipeline = CatalogRefreshPipeline(
            session_factory=session_factory,
            cache=MemoryCacheStore(payload, modified_at=NOW),
            client=CatalogClient(url="https://registry.test/api/v1/package/"),
            options=RefreshOptions(mode=RefreshMode.CACHE_ONLY),
            clock=lambda: NOW,
        )

        first = await pipeline.run()
        second = await pipeline.run()

        assert first.decision is RefreshDecision.USE_CACHE
        assert (first.result.mods_inserted, first.result.mods_updated) == (5, 0)
        assert (second.result.mods_inserted, second.result.mods_updated) == (0, 5)
        async with session_factory() as session:
            links = await session.scalar(select(func.count()).select_from(ModCategory))
            assert await ModRepository(session).count() == 5
            assert links == 10

    @pytest.mark.asyncio
    async def test_user_rating_round_trip(self, migrated_engine, make_record, make_payload):
        session_factory = create_session_factory(migrated_engine)
        record = make_record()
        pipeline = CatalogRefreshPipeline(
            session_factory=session_factory,
            cache=MemoryCacheStore(make_payload([record]), modified_at=NOW),
            client=CatalogClient(url="https://registry.test/api/v1/package/"),
            options=RefreshOptions(mode=RefreshMode.CACHE_ONLY),
            clock=lambda: NOW,
        )
        await pipeline.run()
        mod_id = uuid.UUID(record["uuid4"])

        async with transactional_session(session_factory) as session:
            user = User(username="bob", password_hash="$argon2id$v=19$...")
            session.add(user)
            await session.flush()
            user_id = user.id
            await RatingRepository(session).set_rating(mod_id, user_id, Rating.LIKE)
            await RatingRepository(session).set_rating(mod_id, user_id, Rating.DISLIKE)

        async with session_factory() as session:
            assert await RatingRepository(session).get_rating(mod_id, user_id) is Rating.DISLIKE

        with pytest.raises(IntegrityError):
            async with transactional_session(session_factory) as session:
                await RatingRepository(session).set_rating(uuid.uuid4(), user_id, Rating.LIKE)


@pytest.mark.asyncio
async def test_downgrade_restores_mod_keyed_ratings(database_url):
    config = alembic_config(database_url)
    await run_alembic(command.upgrade, config, "head")
    await run_alembic(command.downgrade, config, "002")

    engine = create_async_engine(database_url)
    try:
        metadata = await reflect(engine)
    finally:
        await engine.dispose()

    assert "legacy_ratings" not in metadata.tables
    assert "users" not in metadata.tables
    assert "catalog_imports" not in metadata.tables
    assert set(metadata.tables["ratings"].columns.keys()) == {"mod_id", "rating"}
