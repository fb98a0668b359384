"""
Application Service для управления статьями.
"""

from typing import Iterable, List, Optional
from uuid import UUID

from personal_blog.application.commands.article_commands import (
    ChangeArticleStatusCommand,
    CreateArticleCommand,
    DeleteArticleCommand,
    UpdateArticleCommand,
)
from personal_blog.application.handlers.article_command_handler import ArticleCommandHandler
from personal_blog.application.queries.get_article_query import GetArticleQuery, ListArticlesQuery
from personal_blog.domain.entities.article import Article, ArticleWithAuthor
from personal_blog.domain.entities.status_change import ArticleStatusChange
from personal_blog.domain.repositories.article_repository import IArticleRepository
from personal_blog.domain.repositories.tag_repository import ITagRepository
from personal_blog.domain.services.permission_gate import PermissionGate
from personal_blog.shared.exceptions.domain_exceptions import EntityNotFoundError


async def attach_tags(tag_repository: ITagRepository, items: Iterable[ArticleWithAuthor]) -> None:
    """Подгрузить теги для списка статей одним запросом."""
    items = list(items)
    tags = await tag_repository.find_by_articles([item.id for item in items])
    for item in items:
        item.tags = tags.get(item.id, [])


class ArticleService:
    """
    Application Service для статей.

    Координирует работу между handlers, репозиториями и PermissionGate.
    """

    def __init__(
        self,
        repository: IArticleRepository,
        tag_repository: ITagRepository,
        command_handler: ArticleCommandHandler
    ):
        self.repository = repository
        self.tag_repository = tag_repository
        self.command_handler = command_handler

    # =========================================================================
    # Commands
    # =========================================================================

    async def create_article(self, command: CreateArticleCommand) -> ArticleWithAuthor:
        """Создать статью и вернуть её вместе с автором и тегами."""
        article = await self.command_handler.handle_create_article(command)
        return await self._with_details(article.id)

    async def update_article(self, command: UpdateArticleCommand) -> ArticleWithAuthor:
        article = await self.command_handler.handle_update_article(command)
        return await self._with_details(article.id)

    async def change_article_status(self, command: ChangeArticleStatusCommand) -> ArticleWithAuthor:
        article = await self.command_handler.handle_change_status(command)
        return await self._with_details(article.id)

    async def delete_article(self, command: DeleteArticleCommand) -> None:
        await self.command_handler.handle_delete_article(command)

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_article_by_id(self, article_id: UUID) -> Optional[ArticleWithAuthor]:
        """Статья с автором, без проверки прав (для внутреннего использования)."""
        return await self.repository.find_with_author(article_id)

    async def get_article_by_id_with_permission(
        self,
        query: GetArticleQuery
    ) -> Optional[ArticleWithAuthor]:
        """
        Статья для запрашивающего пользователя.

        Возвращает None, если статьи нет или она не видна запрашивающему —
        эти случаи наружу не различаются.
        """
        article = PermissionGate.filter_visible(
            await self.repository.find_with_author(query.article_id),
            query.requester_id,
        )
        if article is not None:
            article.tags = await self.tag_repository.find_by_article(article.id)
        return article

    async def get_user_articles(self, query: ListArticlesQuery) -> List[Article]:
        """Статьи владельца, новые первыми."""
        return await self.repository.find_by_owner(
            query.owner_id,
            published=query.published,
            limit=query.limit,
            offset=query.offset,
        )

    async def count_user_articles(self, owner_id: UUID, published: Optional[bool] = None) -> int:
        return await self.repository.count_by_owner(owner_id, published)

    async def get_published_articles(self, limit: int = 20, offset: int = 0) -> List[ArticleWithAuthor]:
        articles = await self.repository.find_published(limit, offset)
        await attach_tags(self.tag_repository, articles)
        return articles

    async def get_articles_count(self, published: Optional[bool] = None) -> int:
        return await self.repository.count(published)

    async def get_articles_by_tag(
        self,
        tag_id: UUID,
        limit: int = 20,
        offset: int = 0
    ) -> List[ArticleWithAuthor]:
        articles = await self.repository.find_published_by_tag(tag_id, limit, offset)
        await attach_tags(self.tag_repository, articles)
        return articles

    async def count_articles_by_tag(self, tag_id: UUID) -> int:
        return await self.repository.count_published_by_tag(tag_id)

    async def get_status_history(
        self,
        article_id: UUID,
        requester_id: Optional[UUID]
    ) -> List[ArticleStatusChange]:
        """
        Журнал статусов статьи (только владельцу).

        Raises:
            EntityNotFoundError: Статьи нет или она не видна
        """
        article = PermissionGate.filter_visible(
            await self.repository.find_by_id(article_id), requester_id
        )
        if article is None:
            raise EntityNotFoundError("Article not found")
        return await self.repository.get_status_history(article_id)

    async def _with_details(self, article_id: UUID) -> ArticleWithAuthor:
        article = await self.repository.find_with_author(article_id)
        if article is None:
            raise EntityNotFoundError("Article not found")
        article.tags = await self.tag_repository.find_by_article(article_id)
        return article
