"""Shared fixtures: in-memory async SQLite store and catalog record builders."""

import json
import uuid
from typing import Any, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from modrate.shared.db.session import (
    create_schema,
    create_session_factory,
    enable_sqlite_foreign_keys,
)


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database with the full schema."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
def make_record() -> Callable[..., dict[str, Any]]:
    """Build one raw catalog entry as the registry publishes it."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> dict[str, Any]:
        counter["n"] += 1
        n = counter["n"]
        record = {
            "name": f"Mod{n}",
            "full_name": f"Author{n}-Mod{n}",
            "owner": f"Author{n}",
            "package_url": f"https://thunderstore.io/c/lethal-company/p/Author{n}/Mod{n}/",
            "date_updated": "2025-03-20T10:00:00.000000Z",
            "uuid4": str(uuid.uuid4()),
            "rating_score": n,
            "is_deprecated": False,
            "has_nsfw_content": False,
            "categories": ["Misc"],
            "versions": [
                {
                    "description": f"Description of mod {n}",
                    "icon": f"https://gcdn.thunderstore.io/live/repository/icons/Mod{n}.png",
                    "version_number": "1.0.0",
                }
            ],
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def make_payload() -> Callable[[list[Any]], bytes]:
    def _make(records: list[Any]) -> bytes:
        return json.dumps(records).encode("utf-8")

    return _make
