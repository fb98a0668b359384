"""
Domain Service: PermissionGate

Правило видимости статьи: читать и изменять статью может только
её владелец, независимо от статуса публикации. Для чужих статей
наружу отдаётся "не найдено", чтобы не раскрывать факт существования.
"""

from typing import Optional, TypeVar
from uuid import UUID

from personal_blog.domain.entities.article import Article, ArticleWithAuthor
from personal_blog.shared.exceptions.domain_exceptions import PermissionDeniedError

T = TypeVar("T", Article, ArticleWithAuthor)


class PermissionGate:
    """Проверки доступа к статьям."""

    @staticmethod
    def can_read(article: T, requester_id: Optional[UUID]) -> bool:
        return requester_id is not None and article.user_id == requester_id

    @staticmethod
    def can_write(article: T, requester_id: Optional[UUID]) -> bool:
        return requester_id is not None and article.user_id == requester_id

    @classmethod
    def filter_visible(cls, article: Optional[T], requester_id: Optional[UUID]) -> Optional[T]:
        """Вернуть статью, если она видна запрашивающему, иначе None."""
        if article is None or not cls.can_read(article, requester_id):
            return None
        return article

    @classmethod
    def ensure_can_write(cls, article: T, requester_id: Optional[UUID]) -> None:
        """
        Исключения:
            PermissionDeniedError: Запрашивающий не владелец статьи
        """
        if not cls.can_write(article, requester_id):
            raise PermissionDeniedError("You do not have permission to modify this article")
