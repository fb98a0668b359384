# -*- coding: utf-8 -*-
"""
Идемпотентная миграция схемы.

Выполняется один раз при старте приложения (lifespan) или командой
``personal-blog init-db``. Все операции вида "create if not exists",
поэтому повторный запуск безопасен.

Для PostgreSQL дополнительно создаются:
- колонка articles.search_vector (tsvector) + GIN индекс
- триггер, пересчитывающий search_vector из title/content/excerpt
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from personal_blog.infrastructure.persistence.models import Base
from personal_blog.shared.exceptions.infrastructure_exceptions import DatabaseError

logger = logging.getLogger(__name__)

POSTGRES_SEARCH_STATEMENTS = [
    "ALTER TABLE articles ADD COLUMN IF NOT EXISTS search_vector tsvector",
    """
    CREATE OR REPLACE FUNCTION update_article_search_vector()
    RETURNS TRIGGER AS $$
    BEGIN
        NEW.search_vector = to_tsvector(
            'english',
            coalesce(NEW.title, '') || ' ' || coalesce(NEW.content, '') || ' ' || coalesce(NEW.excerpt, '')
        );
        RETURN NEW;
    END;
    $$ LANGUAGE plpgsql
    """,
    "DROP TRIGGER IF EXISTS update_articles_search_vector ON articles",
    """
    CREATE TRIGGER update_articles_search_vector
        BEFORE INSERT OR UPDATE ON articles
        FOR EACH ROW
        EXECUTE FUNCTION update_article_search_vector()
    """,
    "CREATE INDEX IF NOT EXISTS articles_search_idx ON articles USING GIN(search_vector)",
    # Заполнить вектор для строк, созданных до триггера
    """
    UPDATE articles
    SET search_vector = to_tsvector(
        'english',
        coalesce(title, '') || ' ' || coalesce(content, '') || ' ' || coalesce(excerpt, '')
    )
    WHERE search_vector IS NULL
    """,
]


async def init_database(engine: AsyncEngine) -> None:
    """
    Создать таблицы и поисковую инфраструктуру (идемпотентно).

    Исключения:
        DatabaseError: Миграция не удалась
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

            if engine.dialect.name == "postgresql":
                for statement in POSTGRES_SEARCH_STATEMENTS:
                    await conn.execute(text(statement))
    except SQLAlchemyError as exc:
        logger.error(f"[Migrations] Database initialization failed: {exc}")
        raise DatabaseError("Database initialization failed") from exc

    logger.info(f"[Migrations] Database initialized ({engine.dialect.name})")


async def reset_database(engine: AsyncEngine) -> None:
    """Удалить все таблицы и создать заново. Все данные теряются."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            if engine.dialect.name == "postgresql":
                await conn.execute(text("DROP FUNCTION IF EXISTS update_article_search_vector()"))
    except SQLAlchemyError as exc:
        logger.error(f"[Migrations] Database reset failed: {exc}")
        raise DatabaseError("Database reset failed") from exc

    logger.warning("[Migrations] All tables dropped")
    await init_database(engine)
