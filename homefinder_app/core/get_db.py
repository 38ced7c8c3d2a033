from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from .settings import settings


class Base(DeclarativeBase):
    pass


def make_engine(url: str, **overrides) -> AsyncEngine:
    options = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    options.update(overrides)
    return create_async_engine(url, **options)


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async_engine = make_engine(settings.DATABASE_URL)
AsyncSessionLocal = make_session_factory(async_engine)


async def get_db_async():
    async with AsyncSessionLocal() as session:
        yield session
