"""Tests for the browse and rating queries of the repositories."""

import uuid
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from sqlalchemy.exc import InvalidRequestError

from modrate.shared.db.session import transactional_session
from modrate.shared.models import CatalogSource, Mod, Rating, User
from modrate.shared.repositories import (
    CatalogImportRepository,
    CategoryRepository,
    ModQueryOptions,
    ModRepository,
    RatingRepository,
)
from modrate.shared.services.catalog_importer import CatalogImporter
from modrate.shared.services.catalog_normalizer import CatalogNormalizer


@pytest_asyncio.fixture
async def catalog(session_factory, make_record):
    """Five mods with distinct dates; returns name → UUID."""
    records = [
        make_record(name="Suits", date_updated="2025-03-05", categories=["Suits"]),
        make_record(name="Emotes", date_updated="2025-03-04", categories=["Emotes", "Misc"]),
        make_record(name="Old", date_updated="2025-03-03", is_deprecated=True),
        make_record(name="Spicy", date_updated="2025-03-02", has_nsfw_content=True),
        make_record(name="Tools", date_updated="2025-03-01", categories=["Misc"]),
    ]
    async with transactional_session(session_factory) as session:
        normalized = CatalogNormalizer().normalize(records)
        await CatalogImporter(session).import_catalog(normalized)
    return {record["name"]: uuid.UUID(record["uuid4"]) for record in records}


@pytest_asyncio.fixture
async def user_id(session_factory):
    async with transactional_session(session_factory) as session:
        user = User(username="alice", password_hash="$argon2id$v=19$...")
        session.add(user)
        await session.flush()
        return user.id


class TestListMods:
    @pytest.mark.asyncio
    async def test_default_hides_deprecated_and_nsfw(self, session, catalog):
        mods = await ModRepository(session).list_mods(ModQueryOptions())

        assert [mod.name for mod in mods] == ["Suits", "Emotes", "Tools"]

    @pytest.mark.asyncio
    async def test_include_flags(self, session, catalog):
        mods = await ModRepository(session).list_mods(
            ModQueryOptions(include_deprecated=True, include_nsfw=True)
        )

        assert [mod.name for mod in mods] == ["Suits", "Emotes", "Old", "Spicy", "Tools"]

    @pytest.mark.asyncio
    async def test_ignored_categories(self, session, catalog):
        mods = await ModRepository(session).list_mods(ModQueryOptions(ignored_categories={"Misc"}))

        assert [mod.name for mod in mods] == ["Suits"]

    @pytest.mark.asyncio
    async def test_limit(self, session, catalog):
        mods = await ModRepository(session).list_mods(ModQueryOptions(limit=2))

        assert len(mods) == 2

    @pytest.mark.asyncio
    async def test_unrated_by_user(self, session_factory, catalog, user_id):
        async with transactional_session(session_factory) as session:
            await RatingRepository(session).set_rating(catalog["Suits"], user_id, Rating.LIKE)

        async with session_factory() as session:
            mods = await ModRepository(session).list_mods(
                ModQueryOptions(limit=1, unrated_by=user_id)
            )

        assert [mod.name for mod in mods] == ["Emotes"]

    @pytest.mark.asyncio
    async def test_categories_for(self, session, catalog):
        names = await ModRepository(session).categories_for(catalog["Emotes"])

        assert names == ["Emotes", "Misc"]


class TestRatings:
    @pytest.mark.asyncio
    async def test_set_and_replace_rating(self, session_factory, catalog, user_id):
        mod_id = catalog["Tools"]
        async with transactional_session(session_factory) as session:
            repo = RatingRepository(session)
            await repo.set_rating(mod_id, user_id, Rating.LIKE)
            await repo.set_rating(mod_id, user_id, Rating.DISLIKE)

        async with session_factory() as session:
            repo = RatingRepository(session)
            assert await repo.get_rating(mod_id, user_id) is Rating.DISLIKE
            assert await repo.count_for_mod(mod_id) == {Rating.LIKE: 0, Rating.DISLIKE: 1}

    @pytest.mark.asyncio
    async def test_unrated_mod(self, session, catalog, user_id):
        repo = RatingRepository(session)

        assert await repo.get_rating(catalog["Suits"], user_id) is None
        assert await repo.count_for_mod(catalog["Suits"]) == {Rating.LIKE: 0, Rating.DISLIKE: 0}

    @pytest.mark.asyncio
    async def test_mod_ratings_never_load_implicitly(self, session, catalog):
        mod = await session.get(Mod, catalog["Suits"])

        assert [link.category.name for link in mod.category_links] == ["Suits"]
        with pytest.raises(InvalidRequestError):
            mod.ratings


class TestCategories:
    @pytest.mark.asyncio
    async def test_insert_names_ignores_existing(self, session_factory):
        async with transactional_session(session_factory) as session:
            repo = CategoryRepository(session)
            await repo.insert_names(["Suits", "Misc"])
            await repo.insert_names(["Misc", "Emotes"])

        async with session_factory() as session:
            repo = CategoryRepository(session)
            assert await repo.get_names() == {"Suits", "Misc", "Emotes"}
            assert set((await repo.get_id_map()).keys()) == {"Suits", "Misc", "Emotes"}


class TestCatalogImports:
    @pytest.mark.asyncio
    async def test_latest_import_date(self, session_factory):
        first = datetime(2025, 3, 20, 8, 0, tzinfo=timezone.utc)
        second = datetime(2025, 3, 21, 8, 0, tzinfo=timezone.utc)
        async with transactional_session(session_factory) as session:
            repo = CatalogImportRepository(session)
            assert await repo.latest_import_date() is None
            for imported_at in (second, first):
                await repo.record(
                    imported_at=imported_at,
                    source=CatalogSource.CACHE,
                    mods_inserted=0,
                    mods_updated=0,
                    categories_created=0,
                    records_skipped=0,
                )

        async with session_factory() as session:
            assert await CatalogImportRepository(session).latest_import_date() == second
