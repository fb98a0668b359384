"""
Database configuration.
"""

from functools import lru_cache
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from personal_blog.infrastructure.config.settings import get_settings


def _unicode_lower(value):
    return value.lower() if value is not None else None


def _configure_sqlite_connection(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    # встроенный lower() в SQLite переводит в нижний регистр только ASCII
    dbapi_connection.create_function("lower", 1, _unicode_lower)


def create_engine_for(url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """
    Создать async engine.

    Для SQLite включаются внешние ключи (ON DELETE CASCADE) и
    Unicode-версия lower() для поиска без учёта регистра,
    для PostgreSQL — пул соединений из настроек.
    """
    engine = create_async_engine(url, echo=echo, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _configure_sqlite_connection)
    return engine


@lru_cache()
def get_engine() -> AsyncEngine:
    settings = get_settings()
    url = settings.get_async_database_url()
    kwargs = {}
    if url.startswith("postgresql"):
        kwargs.update(
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
    return create_engine_for(url, echo=settings.debug, **kwargs)


@lru_cache()
def get_session_factory() -> async_sessionmaker:
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False
    )


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Dependency для получения DB session."""
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()
