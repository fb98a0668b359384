# -*- coding: utf-8 -*-
"""
Repository реализация для статей (SQLAlchemy, async).

Преобразует доменные сущности Article в SQLAlchemy модели и обратно.
Частичное обновление строится из ArticlePatch — только заданные поля,
через ORM, без ручной сборки SQL.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from personal_blog.domain.entities.article import Article, ArticleWithAuthor
from personal_blog.domain.entities.status_change import ArticleStatusChange
from personal_blog.domain.repositories.article_repository import IArticleRepository
from personal_blog.domain.value_objects.article_patch import ArticlePatch
from personal_blog.domain.value_objects.article_status import ArticleStatus
from personal_blog.infrastructure.persistence.models import (
    ArticleModel,
    ArticleStatusHistoryModel,
    UserModel,
    article_tags,
)
from personal_blog.shared.exceptions.domain_exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = ("title", "content", "excerpt")


class ArticleRepositoryImpl(IArticleRepository):
    """
    Реализация repository для PostgreSQL / SQLite.

    Адаптер в Hexagonal Architecture.
    """

    def __init__(self, session: AsyncSession):
        """
        Инициализация репозитория.

        Аргументы:
            session: Асинхронная сессия SQLAlchemy
        """
        self.session = session

    async def save(self, article: Article) -> Article:
        """Сохранить новую статью в БД."""
        model = self._to_model(article)
        self.session.add(model)
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return self._to_entity(model)

    async def update(
        self,
        article_id: UUID,
        patch: ArticlePatch,
        new_status: Optional[ArticleStatus] = None,
        status_change: Optional[ArticleStatusChange] = None
    ) -> Article:
        """Применить patch и (опционально) смену статуса одним коммитом."""
        model = await self.session.get(ArticleModel, article_id)
        if model is None:
            raise EntityNotFoundError("Article not found")

        for name in PATCHABLE_FIELDS:
            if patch.is_set(name):
                setattr(model, name, getattr(patch, name))

        if new_status is not None:
            model.status = new_status.value
            model.published = new_status.is_published

        if status_change is not None:
            self.session.add(self._history_to_model(status_change))

        model.updated_at = datetime.utcnow()

        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        await self.session.refresh(model)
        return self._to_entity(model)

    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        """Найти статью по ID."""
        model = await self.session.get(ArticleModel, article_id)
        return self._to_entity(model) if model else None

    async def find_with_author(self, article_id: UUID) -> Optional[ArticleWithAuthor]:
        """Найти статью по ID вместе с именем и email автора."""
        result = await self.session.execute(
            self._with_author_query().where(ArticleModel.id == article_id)
        )
        row = result.one_or_none()
        return self._row_to_with_author(row) if row else None

    async def find_by_owner(
        self,
        owner_id: UUID,
        published: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Article]:
        """Статьи пользователя, новые первыми."""
        query = select(ArticleModel).where(ArticleModel.user_id == owner_id)

        if published is not None:
            query = query.where(ArticleModel.published == published)

        query = query.order_by(ArticleModel.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count_by_owner(self, owner_id: UUID, published: Optional[bool] = None) -> int:
        query = select(func.count(ArticleModel.id)).where(ArticleModel.user_id == owner_id)
        if published is not None:
            query = query.where(ArticleModel.published == published)
        result = await self.session.execute(query)
        return result.scalar()

    async def find_published(self, limit: int = 20, offset: int = 0) -> List[ArticleWithAuthor]:
        """Публичная лента: опубликованные статьи всех авторов."""
        result = await self.session.execute(
            self._with_author_query()
            .where(ArticleModel.published.is_(True))
            .order_by(ArticleModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._row_to_with_author(row) for row in result.all()]

    async def find_published_by_tag(
        self,
        tag_id: UUID,
        limit: int = 20,
        offset: int = 0
    ) -> List[ArticleWithAuthor]:
        """Опубликованные статьи с тегом."""
        result = await self.session.execute(
            self._with_author_query()
            .join(article_tags, article_tags.c.article_id == ArticleModel.id)
            .where(article_tags.c.tag_id == tag_id)
            .where(ArticleModel.published.is_(True))
            .order_by(ArticleModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [self._row_to_with_author(row) for row in result.all()]

    async def count_published_by_tag(self, tag_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count(ArticleModel.id))
            .select_from(ArticleModel)
            .join(article_tags, article_tags.c.article_id == ArticleModel.id)
            .where(article_tags.c.tag_id == tag_id)
            .where(ArticleModel.published.is_(True))
        )
        return result.scalar()

    async def count(self, published: Optional[bool] = None) -> int:
        """Подсчитать количество статей."""
        query = select(func.count(ArticleModel.id))
        if published is not None:
            query = query.where(ArticleModel.published == published)
        result = await self.session.execute(query)
        return result.scalar()

    async def delete(self, article_id: UUID) -> bool:
        """Удалить статью по ID. Связи с тегами и история — каскадом."""
        try:
            result = await self.session.execute(
                delete(ArticleModel).where(ArticleModel.id == article_id)
            )
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return result.rowcount > 0

    async def get_status_history(self, article_id: UUID) -> List[ArticleStatusChange]:
        result = await self.session.execute(
            select(ArticleStatusHistoryModel)
            .where(ArticleStatusHistoryModel.article_id == article_id)
            .order_by(ArticleStatusHistoryModel.created_at.asc())
        )
        return [self._history_to_entity(m) for m in result.scalars().all()]

    # =========================================================================
    # Маппинг Entity ↔ Model
    # =========================================================================

    @staticmethod
    def _with_author_query():
        return select(ArticleModel, UserModel.name, UserModel.email).join(
            UserModel, ArticleModel.user_id == UserModel.id
        )

    def _row_to_with_author(self, row) -> ArticleWithAuthor:
        return row_to_article_with_author(row)

    def _to_model(self, entity: Article) -> ArticleModel:
        """Конвертация доменной сущности Article → ArticleModel."""
        return ArticleModel(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            content=entity.content,
            excerpt=entity.excerpt,
            published=entity.published,
            status=entity.status.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _to_entity(self, model: ArticleModel) -> Article:
        return model_to_article(model)

    @staticmethod
    def _history_to_model(entity: ArticleStatusChange) -> ArticleStatusHistoryModel:
        return ArticleStatusHistoryModel(
            id=entity.id,
            article_id=entity.article_id,
            from_status=entity.from_status.value,
            to_status=entity.to_status.value,
            changed_by=entity.changed_by,
            reason=entity.reason,
            created_at=entity.created_at,
        )

    @staticmethod
    def _history_to_entity(model: ArticleStatusHistoryModel) -> ArticleStatusChange:
        return ArticleStatusChange(
            id=model.id,
            article_id=model.article_id,
            from_status=ArticleStatus(model.from_status),
            to_status=ArticleStatus(model.to_status),
            changed_by=model.changed_by,
            reason=model.reason,
            created_at=model.created_at,
        )


def model_to_article(model: ArticleModel) -> Article:
    """
    Конвертация ArticleModel → Article.

    Статус берётся из колонки status; для строк без статуса
    (старые данные) — выводится из published.
    """
    status = (
        ArticleStatus(model.status)
        if model.status
        else ArticleStatus.from_published(bool(model.published))
    )
    return Article(
        id=model.id,
        user_id=model.user_id,
        title=model.title,
        content=model.content,
        excerpt=model.excerpt,
        status=status,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def row_to_article_with_author(row) -> ArticleWithAuthor:
    """Строка (ArticleModel, author_name, author_email) → ArticleWithAuthor."""
    model, author_name, author_email = row[:3]
    return ArticleWithAuthor(
        article=model_to_article(model),
        author_name=author_name,
        author_email=author_email,
    )
