# -*- coding: utf-8 -*-
"""
Доменная сущность: Статья (Article)

Статья принадлежит ровно одному пользователю (владельцу).
Статус хранится как ArticleStatus; флаг published всегда
совпадает с ``status == PUBLISHED`` и остаётся единственным сигналом
видимости для внешних потребителей.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from personal_blog.domain.entities.tag import Tag
from personal_blog.domain.value_objects.article_patch import ArticlePatch
from personal_blog.domain.value_objects.article_status import ArticleStatus
from personal_blog.shared.exceptions.domain_exceptions import DomainValidationError

TITLE_MAX_LENGTH = 500
EXCERPT_MAX_LENGTH = 1000


def validate_title(title: Optional[str]) -> None:
    if not title or not title.strip():
        raise DomainValidationError("Article title cannot be empty")
    if len(title) > TITLE_MAX_LENGTH:
        raise DomainValidationError(f"Article title too long (max {TITLE_MAX_LENGTH} chars)")


def validate_content(content: Optional[str]) -> None:
    if not content or not content.strip():
        raise DomainValidationError("Article content cannot be empty")


def validate_excerpt(excerpt: Optional[str]) -> None:
    if excerpt is not None and len(excerpt) > EXCERPT_MAX_LENGTH:
        raise DomainValidationError(f"Article excerpt too long (max {EXCERPT_MAX_LENGTH} chars)")


@dataclass
class Article:
    """
    Доменная сущность статьи.

    Инварианты:
    - Заголовок не пустой (max 500 символов)
    - Контент не пустой
    - Excerpt не длиннее 1000 символов
    - published == (status == PUBLISHED)
    """

    user_id: UUID
    title: str
    content: str
    excerpt: Optional[str] = None
    status: ArticleStatus = ArticleStatus.DRAFT
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        """Валидация инвариантов после инициализации."""
        self.validate()

    @property
    def published(self) -> bool:
        return self.status.is_published

    def validate(self) -> None:
        """
        Проверка инвариантов сущности.

        Исключения:
            DomainValidationError: Если инварианты нарушены
        """
        validate_title(self.title)
        validate_content(self.content)
        validate_excerpt(self.excerpt)

    def apply_patch(self, patch: ArticlePatch) -> "Article":
        """
        Вернуть копию статьи с применёнными полями patch.

        Статус здесь не меняется — переход проверяется отдельно
        (см. ArticleCommandHandler).
        """
        changes = {
            name: value
            for name, value in patch.changes().items()
            if name in ("title", "content", "excerpt")
        }
        return replace(self, **changes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Article(id={self.id}, title='{self.title[:50]}', status={self.status.value})"


@dataclass
class ArticleWithAuthor:
    """Статья вместе с данными автора и тегами (read model)."""

    article: Article
    author_name: str
    author_email: str
    tags: List[Tag] = field(default_factory=list)

    @property
    def id(self) -> UUID:
        return self.article.id

    @property
    def user_id(self) -> UUID:
        return self.article.user_id


@dataclass
class SearchResult:
    """Результат поиска: статья, релевантность и фрагмент для подсветки."""

    item: ArticleWithAuthor
    rank: float
    highlight: Optional[str] = None
