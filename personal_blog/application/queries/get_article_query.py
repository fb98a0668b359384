"""
CQRS Queries: чтение статей.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class GetArticleQuery:
    """Запрос статьи по ID от имени пользователя (None — аноним)."""

    article_id: UUID
    requester_id: Optional[UUID] = None


@dataclass(frozen=True)
class ListArticlesQuery:
    """Запрос списка статей владельца."""

    owner_id: UUID
    published: Optional[bool] = None
    limit: Optional[int] = None
    offset: int = 0


@dataclass(frozen=True)
class SearchArticlesQuery:
    """Поиск; owner_id=None — публичный поиск по опубликованным."""

    query: str
    limit: int = 10
    owner_id: Optional[UUID] = None
