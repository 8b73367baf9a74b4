from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from board.config import Settings


class Base(DeclarativeBase):
    pass


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine for *settings*.

    ``pool_pre_ping`` is only meaningful for networked databases, so it is
    skipped for SQLite URLs.
    """
    kwargs = {"echo": settings.DEBUG}
    if not settings.DATABASE_URL.startswith("sqlite"):
        kwargs["pool_pre_ping"] = True
    return create_async_engine(settings.DATABASE_URL, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine, drop_existing: bool = False) -> None:
    """Create the ``article`` table (and anything else on ``Base.metadata``)."""
    # Import models so their tables are registered on Base.metadata.
    import board.models  # noqa: F401

    async with engine.begin() as conn:
        if drop_existing:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
