from __future__ import annotations

import pytest
from sqlalchemy import text

import flashdeck.db.models  # noqa: F401
from flashdeck.core.integration_db_safety import check_integration_db
from flashdeck.db.models.base import Base
from flashdeck.db.session import engine

TRUNCATE_TABLES = (
    "past_streaks",
    "streak_state",
    "study_sessions",
    "cards",
    "decks",
    "users",
)

TRUNCATE_SQL = f"TRUNCATE TABLE {', '.join(TRUNCATE_TABLES)} RESTART IDENTITY CASCADE"


@pytest.fixture(scope="session", autouse=True)
def guard_integration_db_target() -> None:
    check = check_integration_db(str(engine.url))
    if not check.is_safe:
        pytest.skip(f"Refusing to truncate tables for integration tests: {check.reason}")


@pytest.fixture(autouse=True)
async def cleanup_db() -> None:
    # Pooled asyncpg connections are bound to the loop that opened them.
    await engine.dispose()

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:  # pragma: no cover - environment-dependent
        pytest.skip(f"Postgres is required for integration tests: {exc}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(text(TRUNCATE_SQL))

    yield

    await engine.dispose()
