from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from saas_backend.config import settings
from saas_backend.db.errors import database_errors

# Naming conventions for database constraints, so Alembic autogenerate
# produces stable constraint names across migrations.
NAMING_CONVENTION: dict[str, str] = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# Async engine with connection pooling. Creating it does not connect.
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=settings.db_pool_recycle,
    pool_pre_ping=settings.db_pool_pre_ping,
    echo=settings.db_echo,
    # asyncpg driver options, passed directly to asyncpg.connect()
    connect_args={"command_timeout": settings.db_statement_timeout},
)

# Attributes stay loaded after commit; no lazy reloads in async code.
async_session = async_sessionmaker(engine, expire_on_commit=False)


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Commit on success, roll back on exception.

    A failing commit is classified like any other persistence failure and
    also triggers the rollback.
    """
    try:
        yield session
        with database_errors():
            await session.commit()
    except Exception:
        await session.rollback()
        raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a database session per request.

    This is the single place where transaction boundaries are managed; services
    and repositories never call commit() or rollback() directly. Routers depend
    on it with scope="function" so the commit finishes before the response is
    sent, and a commit failure becomes the response.
    """
    async with async_session() as session, transaction(session):
        yield session


async def shutdown() -> None:
    """Close all pooled database connections."""
    await engine.dispose()
