"""
CQRS Commands: создание, изменение, смена статуса, удаление статьи.
"""

from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from personal_blog.domain.value_objects.article_patch import ArticlePatch
from personal_blog.domain.value_objects.article_status import ArticleStatus


@dataclass(frozen=True)
class CreateArticleCommand:
    """
    Команда создания статьи.

    Иммутабельна (frozen=True) - следует принципу CQRS.
    """

    # Required
    owner_id: UUID
    title: str
    content: str

    # Optional
    excerpt: Optional[str] = None
    published: bool = False
    tags: List[str] = None

    def __post_init__(self):
        """Установка значений по умолчанию для изменяемых типов."""
        if self.tags is None:
            object.__setattr__(self, 'tags', [])


@dataclass(frozen=True)
class UpdateArticleCommand:
    """Частичное обновление статьи; tags=None — теги не трогать."""

    article_id: UUID
    requester_id: UUID
    patch: ArticlePatch
    tags: Optional[List[str]] = None


@dataclass(frozen=True)
class ChangeArticleStatusCommand:
    """Явная смена статуса с причиной для журнала."""

    article_id: UUID
    requester_id: UUID
    to_status: ArticleStatus
    reason: Optional[str] = None


@dataclass(frozen=True)
class DeleteArticleCommand:
    article_id: UUID
    requester_id: UUID
