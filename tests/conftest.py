"""
Shared fixtures for the article board tests.

- Every test gets its own engine on ``sqlite+aiosqlite:///:memory:``, so no
  PostgreSQL server is needed.
- The in-memory database lives only as long as its one connection, hence
  ``StaticPool``: each runner session reuses that single connection.
- The schema comes from ``Base.metadata`` and is dropped again on teardown.
- ``article_fixture`` loads the same data as ``scripts/seed.py``: ids 1..30,
  ids 11..20 blinded, titles "제목N", bodies "내용N", timestamps from the
  local clock just like ``ArticleService.write``.
"""
from datetime import datetime

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from board.database import Base, create_schema, create_session_factory
from board.instrumentation import install_query_counter
from board.services.article_service import ArticleService
from board.sql_runner import SqlRunner

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_DATA_SIZE = 30
BLIND_IDS = range(11, 21)

_INSERT_FIXTURE_ROW = """
    INSERT INTO article ("createdDate", "modifiedDate", title, body, "isBlind")
    VALUES (?, ?, ?, ?, ?)
"""


# ---------------------------------------------------------------------------
# Engine / session fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine():
    """Create all tables before each test, drop after to guarantee isolation."""
    engine_test = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_schema(engine_test)
    yield engine_test
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine_test.dispose()


@pytest_asyncio.fixture
async def query_counter(engine):
    return install_query_counter(engine)


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def sql_runner(session_factory) -> SqlRunner:
    return SqlRunner(session_factory)


@pytest_asyncio.fixture
async def article_service(sql_runner) -> ArticleService:
    return ArticleService(sql_runner)


# ---------------------------------------------------------------------------
# Data fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def article_fixture(sql_runner) -> None:
    """Insert articles 1..30 directly with SQL; 11..20 are blinded."""
    for no in range(1, TEST_DATA_SIZE + 1):
        now = datetime.now()
        await sql_runner.run(_INSERT_FIXTURE_ROW, now, now, f"제목{no}", f"내용{no}", no in BLIND_IDS)
