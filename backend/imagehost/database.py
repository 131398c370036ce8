"""Async SQLAlchemy engine and session factory.

The engine is created once in the application lifespan and kept on
``app.state``; routes receive a session through ``get_db``:

    from imagehost.database import get_db

    @router.get("/items")
    async def list_items(db: AsyncSession = Depends(get_db)):
        result = await db.execute(select(Item))
        return result.scalars().all()
"""
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


def build_engine(database_url: str) -> AsyncEngine:
    """Create the process-wide engine. SQLite gets the dialect's default pool."""
    pool_kwargs = {}
    if not database_url.startswith("sqlite"):
        pool_kwargs = {"pool_size": 10, "max_overflow": 20}
    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        **pool_kwargs,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request):
    """FastAPI dependency that yields an async DB session."""
    async with request.app.state.async_session() as session:
        try:
            yield session
        finally:
            await session.close()
