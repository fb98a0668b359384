"""
Repository Interface: IArticleSearch

Порт полнотекстового поиска статей.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from personal_blog.domain.entities.article import SearchResult


class IArticleSearch(ABC):
    """
    Двухуровневый поиск.

    1. Ранжированный полнотекстовый поиск по search vector.
    2. Если он ничего не дал — поиск подстроки в title/content/excerpt.
    """

    @abstractmethod
    async def search(
        self,
        query: str,
        limit: int = 10,
        owner_id: Optional[UUID] = None,
        published_only: bool = False
    ) -> List[SearchResult]:
        """
        Args:
            query: Уже нормализованный поисковый запрос
            limit: Максимум результатов
            owner_id: Ограничить статьями владельца
            published_only: Только опубликованные (публичный поиск)
        """
        pass
