"""
Repository Interface: ITagRepository

Порт для тегов и связей статья-тег.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from personal_blog.domain.entities.tag import Tag, TagWithCount


class ITagRepository(ABC):
    """Интерфейс репозитория тегов."""

    @abstractmethod
    async def get_or_create(self, name: str) -> Tag:
        """
        Найти тег по имени или создать. Идемпотентно.

        Args:
            name: Имя тега (уже нормализованное)
        """
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: UUID) -> Optional[Tag]:
        pass

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Tag]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Tag]:
        """Все теги по имени."""
        pass

    @abstractmethod
    async def find_with_count(self) -> List[TagWithCount]:
        """Теги с количеством опубликованных статей."""
        pass

    @abstractmethod
    async def search(self, query: str, limit: int = 10) -> List[Tag]:
        """Поиск тегов по подстроке (регистронезависимо)."""
        pass

    @abstractmethod
    async def find_by_article(self, article_id: UUID) -> List[Tag]:
        """Теги статьи по имени."""
        pass

    @abstractmethod
    async def find_by_articles(self, article_ids: Iterable[UUID]) -> Dict[UUID, List[Tag]]:
        """
        Теги сразу для нескольких статей (одним запросом).

        Статьи без тегов в результат не попадают.
        """
        pass

    @abstractmethod
    async def replace_article_tags(self, article_id: UUID, names: List[str]) -> List[Tag]:
        """
        Атомарно заменить набор тегов статьи.

        Старые связи удаляются и новые вставляются одной транзакцией;
        при любой ошибке — rollback, прежний набор остаётся.
        """
        pass

    @abstractmethod
    async def stage_article_tags(self, article_id: UUID, names: List[str]) -> List[Tag]:
        """
        То же, что replace_article_tags, но без commit.

        Изменения фиксирует следующий commit той же сессии; при ошибке
        транзакция откатывается целиком.
        """
        pass

    @abstractmethod
    async def count_usages(self, tag_id: UUID) -> int:
        pass

    @abstractmethod
    async def delete(self, tag_id: UUID) -> bool:
        pass
