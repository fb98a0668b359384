# -*- coding: utf-8 -*-
"""
Двухуровневый поиск статей.

Tier 1: полнотекстовый поиск PostgreSQL по articles.search_vector
        (ts_rank + ts_headline).
Tier 2: если tier 1 недоступен (не PostgreSQL) или не дал строк —
        регистронезависимый поиск подстроки в title/content/excerpt.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, literal_column, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from personal_blog.domain.entities.article import ArticleWithAuthor, SearchResult
from personal_blog.domain.repositories.article_search import IArticleSearch
from personal_blog.infrastructure.persistence.article_repository_impl import row_to_article_with_author
from personal_blog.infrastructure.persistence.models import ArticleModel, UserModel

logger = logging.getLogger(__name__)

TS_CONFIG = "english"
HEADLINE_OPTIONS = "MaxWords=20, MinWords=5"
FALLBACK_RANK = 0.1
CONTENT_PREVIEW_LENGTH = 200


class ArticleSearchImpl(IArticleSearch):
    """Адаптер поиска: tier 1 (tsvector) с fallback на tier 2 (подстрока)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def supports_rank_search(self) -> bool:
        return self.session.get_bind().dialect.name == "postgresql"

    async def search(
        self,
        query: str,
        limit: int = 10,
        owner_id: Optional[UUID] = None,
        published_only: bool = False
    ) -> List[SearchResult]:
        results: List[SearchResult] = []

        if self.supports_rank_search:
            results = await self._rank_search(query, limit, owner_id, published_only)

        if not results:
            logger.debug(f"[Search] Falling back to substring match for '{query}'")
            results = await self._substring_search(query, limit, owner_id, published_only)

        return results

    # =========================================================================
    # Tier 1
    # =========================================================================

    async def _rank_search(
        self,
        query: str,
        limit: int,
        owner_id: Optional[UUID],
        published_only: bool
    ) -> List[SearchResult]:
        ts_query = func.plainto_tsquery(TS_CONFIG, query)
        vector = literal_column("articles.search_vector")
        rank = func.ts_rank(vector, ts_query).label("rank")
        highlight = func.ts_headline(
            TS_CONFIG, ArticleModel.content, ts_query, HEADLINE_OPTIONS
        ).label("highlight")

        stmt = (
            select(ArticleModel, UserModel.name, UserModel.email, rank, highlight)
            .join(UserModel, ArticleModel.user_id == UserModel.id)
            .where(vector.op("@@")(ts_query))
        )
        stmt = self._scope(stmt, owner_id, published_only)
        stmt = stmt.order_by(rank.desc(), ArticleModel.created_at.desc()).limit(limit)

        result = await self.session.execute(stmt)
        return [
            SearchResult(
                item=row_to_article_with_author((model, name, email)),
                rank=float(row_rank),
                highlight=row_highlight,
            )
            for model, name, email, row_rank, row_highlight in result.all()
        ]

    # =========================================================================
    # Tier 2
    # =========================================================================

    async def _substring_search(
        self,
        query: str,
        limit: int,
        owner_id: Optional[UUID],
        published_only: bool
    ) -> List[SearchResult]:
        needle = query.lower()
        stmt = (
            select(ArticleModel, UserModel.name, UserModel.email)
            .join(UserModel, ArticleModel.user_id == UserModel.id)
            .where(
                or_(
                    func.lower(ArticleModel.title).contains(needle, autoescape=True),
                    func.lower(ArticleModel.content).contains(needle, autoescape=True),
                    func.lower(func.coalesce(ArticleModel.excerpt, "")).contains(
                        needle, autoescape=True
                    ),
                )
            )
        )
        stmt = self._scope(stmt, owner_id, published_only)
        stmt = stmt.order_by(ArticleModel.created_at.desc()).limit(limit)

        result = await self.session.execute(stmt)
        results = []
        for row in result.all():
            item = row_to_article_with_author(row)
            results.append(
                SearchResult(item=item, rank=FALLBACK_RANK, highlight=fallback_highlight(item, needle))
            )
        return results

    @staticmethod
    def _scope(stmt, owner_id: Optional[UUID], published_only: bool):
        if owner_id is not None:
            stmt = stmt.where(ArticleModel.user_id == owner_id)
        if published_only:
            stmt = stmt.where(ArticleModel.published.is_(True))
        return stmt


def fallback_highlight(item: ArticleWithAuthor, needle: str) -> str:
    """Заголовок, если совпал; иначе excerpt, если совпал; иначе начало контента."""
    article = item.article
    if needle in article.title.lower():
        return article.title
    if article.excerpt and needle in article.excerpt.lower():
        return article.excerpt
    return article.content[:CONTENT_PREVIEW_LENGTH]
