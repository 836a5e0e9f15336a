from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from herdbook.config.settings import Settings
from herdbook.infrastructure.db.base import Base
from herdbook.infrastructure.db.orm import document  # noqa: F401
from herdbook.infrastructure.db.session import create_engine, create_session_factory
from herdbook.infrastructure.store.sqlalchemy_store import SQLAlchemyRecordStore
from herdbook.interfaces.http.main import create_app

OWNER_ID = "farm-1"
OTHER_OWNER_ID = "farm-2"


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "owner_header": "X-Owner-ID",
            "log_level": "INFO",
            "environment": "test",
        }
    )


@pytest.fixture()
async def record_store(test_settings: Settings) -> AsyncIterator[SQLAlchemyRecordStore]:
    engine = create_engine(test_settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SQLAlchemyRecordStore(create_session_factory(engine))
    await engine.dispose()


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()


@pytest.fixture()
def owner_headers() -> dict[str, str]:
    return {"X-Owner-ID": OWNER_ID}


@pytest.fixture()
def other_owner_headers() -> dict[str, str]:
    return {"X-Owner-ID": OTHER_OWNER_ID}
