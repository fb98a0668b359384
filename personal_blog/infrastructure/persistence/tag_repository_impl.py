# -*- coding: utf-8 -*-
"""
Repository реализация для тегов.

get-or-create построен на INSERT ... ON CONFLICT DO NOTHING, поэтому
повторный вызов с тем же именем не создаёт дубликатов даже при гонке.
Замена набора тегов статьи — одна транзакция: удалить все связи,
вставить новые, commit; при любой ошибке — rollback. stage_article_tags
делает то же без commit, чтобы правка статьи и тегов фиксировалась вместе.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from personal_blog.domain.entities.tag import Tag, TagWithCount
from personal_blog.domain.repositories.tag_repository import ITagRepository
from personal_blog.infrastructure.persistence.models import ArticleModel, TagModel, article_tags

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class TagRepositoryImpl(ITagRepository):
    """Адаптер хранилища тегов."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_or_create(self, name: str) -> Tag:
        """Найти или создать тег (идемпотентно)."""
        try:
            tag = await self._resolve(name)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return tag

    async def find_by_id(self, tag_id: UUID) -> Optional[Tag]:
        model = await self.session.get(TagModel, tag_id)
        return self._to_entity(model) if model else None

    async def find_by_name(self, name: str) -> Optional[Tag]:
        result = await self.session.execute(select(TagModel).where(TagModel.name == name))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_all(self) -> List[Tag]:
        result = await self.session.execute(select(TagModel).order_by(TagModel.name.asc()))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_with_count(self) -> List[TagWithCount]:
        """Теги с количеством опубликованных статей (черновики не считаются)."""
        result = await self.session.execute(
            select(TagModel, func.count(ArticleModel.id))
            .outerjoin(article_tags, article_tags.c.tag_id == TagModel.id)
            .outerjoin(
                ArticleModel,
                (article_tags.c.article_id == ArticleModel.id) & ArticleModel.published.is_(True)
            )
            .group_by(TagModel.id, TagModel.name, TagModel.created_at)
            .order_by(TagModel.name.asc())
        )
        return [
            TagWithCount(tag=self._to_entity(model), article_count=int(count))
            for model, count in result.all()
        ]

    async def search(self, query: str, limit: int = 10) -> List[Tag]:
        result = await self.session.execute(
            select(TagModel)
            .where(func.lower(TagModel.name).contains(query.lower(), autoescape=True))
            .order_by(TagModel.name.asc())
            .limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_by_article(self, article_id: UUID) -> List[Tag]:
        result = await self.session.execute(
            select(TagModel)
            .join(article_tags, article_tags.c.tag_id == TagModel.id)
            .where(article_tags.c.article_id == article_id)
            .order_by(TagModel.name.asc())
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_by_articles(self, article_ids: Iterable[UUID]) -> Dict[UUID, List[Tag]]:
        ids = list(article_ids)
        if not ids:
            return {}

        result = await self.session.execute(
            select(article_tags.c.article_id, TagModel)
            .select_from(article_tags)
            .join(TagModel, article_tags.c.tag_id == TagModel.id)
            .where(article_tags.c.article_id.in_(ids))
            .order_by(TagModel.name.asc())
        )
        tags: Dict[UUID, List[Tag]] = {}
        for article_id, model in result.all():
            tags.setdefault(article_id, []).append(self._to_entity(model))
        return tags

    async def replace_article_tags(self, article_id: UUID, names: List[str]) -> List[Tag]:
        """Атомарно заменить теги статьи."""
        tags = await self.stage_article_tags(article_id, names)
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            logger.warning(f"[Tags] Tag replacement rolled back for article {article_id}")
            raise
        return tags

    async def stage_article_tags(self, article_id: UUID, names: List[str]) -> List[Tag]:
        """Заменить связи статьи в текущей транзакции."""
        try:
            tags: List[Tag] = []
            for name in names:
                tags.append(await self._resolve(name))

            await self.session.execute(
                delete(article_tags).where(article_tags.c.article_id == article_id)
            )
            for tag in tags:
                await self._link(article_id, tag.id)
        except Exception:
            await self.session.rollback()
            logger.warning(f"[Tags] Tag replacement rolled back for article {article_id}")
            raise

        return sorted(tags, key=lambda t: t.name)

    async def count_usages(self, tag_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(article_tags).where(article_tags.c.tag_id == tag_id)
        )
        return result.scalar()

    async def delete(self, tag_id: UUID) -> bool:
        try:
            result = await self.session.execute(delete(TagModel).where(TagModel.id == tag_id))
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return result.rowcount > 0

    # =========================================================================
    # Внутренние операции (без commit)
    # =========================================================================

    async def _resolve(self, name: str) -> Tag:
        """Get-or-create в текущей транзакции."""
        dialect = self.session.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect)

        if insert_fn is not None:
            await self.session.execute(
                insert_fn(TagModel)
                .values(id=uuid4(), name=name, created_at=datetime.utcnow())
                .on_conflict_do_nothing(index_elements=["name"])
            )
        elif await self.find_by_name(name) is None:
            await self.session.execute(
                insert(TagModel).values(id=uuid4(), name=name, created_at=datetime.utcnow())
            )

        tag = await self.find_by_name(name)
        if tag is None:
            raise SQLAlchemyError(f"Tag '{name}' could not be resolved")
        return tag

    async def _link(self, article_id: UUID, tag_id: UUID) -> None:
        await self.session.execute(
            insert(article_tags).values(article_id=article_id, tag_id=tag_id)
        )

    @staticmethod
    def _to_entity(model: TagModel) -> Tag:
        return Tag(id=model.id, name=model.name, created_at=model.created_at)
