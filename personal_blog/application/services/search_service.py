"""
Application Service для поиска статей.
"""

from typing import List
from uuid import UUID

from personal_blog.application.queries.get_article_query import SearchArticlesQuery
from personal_blog.application.services.article_service import attach_tags
from personal_blog.domain.entities.article import SearchResult
from personal_blog.domain.repositories.article_search import IArticleSearch
from personal_blog.domain.repositories.tag_repository import ITagRepository
from personal_blog.shared.exceptions.domain_exceptions import DomainValidationError

QUERY_MAX_LENGTH = 100
MAX_LIMIT = 50


def normalize_search_query(query: SearchArticlesQuery) -> SearchArticlesQuery:
    """
    Проверить и нормализовать запрос до обращения к хранилищу.

    Raises:
        DomainValidationError: Пустой запрос, длиннее 100 символов,
            limit вне 1..50
    """
    text = (query.query or "").strip()
    if not text:
        raise DomainValidationError("Search query cannot be empty")
    if len(text) > QUERY_MAX_LENGTH:
        raise DomainValidationError(f"Search query too long (max {QUERY_MAX_LENGTH} chars)")
    if query.limit < 1 or query.limit > MAX_LIMIT:
        raise DomainValidationError(f"Search limit must be between 1 and {MAX_LIMIT}")
    return SearchArticlesQuery(query=text, limit=query.limit, owner_id=query.owner_id)


class SearchService:
    """Поиск по статьям владельца или по всем опубликованным."""

    def __init__(self, search: IArticleSearch, tag_repository: ITagRepository):
        self.search = search
        self.tag_repository = tag_repository

    async def search_articles(self, query: SearchArticlesQuery) -> List[SearchResult]:
        query = normalize_search_query(query)
        results = await self.search.search(
            query.query,
            limit=query.limit,
            owner_id=query.owner_id,
            published_only=query.owner_id is None,
        )
        await attach_tags(self.tag_repository, [r.item for r in results])
        return results

    async def search_user_articles(self, owner_id: UUID, query: str, limit: int = 10) -> List[SearchResult]:
        return await self.search_articles(
            SearchArticlesQuery(query=query, limit=limit, owner_id=owner_id)
        )

    async def search_published_articles(self, query: str, limit: int = 10) -> List[SearchResult]:
        return await self.search_articles(SearchArticlesQuery(query=query, limit=limit))
