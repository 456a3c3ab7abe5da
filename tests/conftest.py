from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import cast
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from sowcycle.config.settings import Settings
from sowcycle.infrastructure.db import orm  # noqa: F401
from sowcycle.infrastructure.db.base import Base
from sowcycle.infrastructure.db.orm.pen import PenORM
from sowcycle.infrastructure.db.orm.pig import PigORM
from sowcycle.interfaces.http.main import create_app


@pytest.fixture(scope="session")
def farm_id() -> UUID:
    return uuid4()


@pytest.fixture(scope="session")
def user_id() -> UUID:
    return uuid4()


@pytest.fixture()
def headers(farm_id: UUID, user_id: UUID) -> dict[str, str]:
    return {"X-Farm-ID": str(farm_id), "X-User-ID": str(user_id)}


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "farm_header": "X-Farm-ID",
            "user_header": "X-User-ID",
            "log_level": "INFO",
            "environment": "test",
            "overdue_grace_days": 3,
        }
    )


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
        await engine.dispose()


@pytest.fixture()
async def seeded_pigs(app, client, farm_id: UUID) -> dict[str, UUID]:
    """Pen 'Pen A' holding sows S1/S2 and boars B1/B2."""
    pen_id = uuid4()
    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        async_session = cast(AsyncSession, session)
        async_session.add(PenORM(id=pen_id, farm_id=farm_id, name="Pen A"))
        await async_session.flush()
        async_session.add_all(
            [
                PigORM(id=uuid4(), farm_id=farm_id, pig_id=tag, gender=gender, pen_id=pen_id)
                for tag, gender in (
                    ("S1", "female"),
                    ("S2", "female"),
                    ("B1", "male"),
                    ("B2", "male"),
                )
            ]
        )
        await async_session.commit()
    return {"pen_id": pen_id}
