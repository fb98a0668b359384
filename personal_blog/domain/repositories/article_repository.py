"""
Repository Interface: IArticleRepository

Порт (интерфейс) для работы с хранилищем статей.
Реализации (адаптеры) находятся в infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from personal_blog.domain.entities.article import Article, ArticleWithAuthor
from personal_blog.domain.entities.status_change import ArticleStatusChange
from personal_blog.domain.value_objects.article_patch import ArticlePatch
from personal_blog.domain.value_objects.article_status import ArticleStatus


class IArticleRepository(ABC):
    """
    Интерфейс репозитория статей.

    Следует Repository Pattern и является портом в Hexagonal Architecture.
    Проверки владельца и переходов статуса выполняет application layer.
    """

    @abstractmethod
    async def save(self, article: Article) -> Article:
        """
        Сохранить новую статью.

        Args:
            article: Статья для сохранения

        Returns:
            Сохранённая статья
        """
        pass

    @abstractmethod
    async def update(
        self,
        article_id: UUID,
        patch: ArticlePatch,
        new_status: Optional[ArticleStatus] = None,
        status_change: Optional[ArticleStatusChange] = None
    ) -> Article:
        """
        Применить частичное обновление одной транзакцией.

        Args:
            article_id: UUID статьи
            patch: Поля для изменения
            new_status: Новый статус (если меняется)
            status_change: Запись журнала статусов для того же коммита

        Returns:
            Обновлённая статья
        """
        pass

    @abstractmethod
    async def find_by_id(self, article_id: UUID) -> Optional[Article]:
        """Найти статью по ID."""
        pass

    @abstractmethod
    async def find_with_author(self, article_id: UUID) -> Optional[ArticleWithAuthor]:
        """Найти статью по ID вместе с автором."""
        pass

    @abstractmethod
    async def find_by_owner(
        self,
        owner_id: UUID,
        published: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Article]:
        """
        Статьи пользователя, новые первыми.

        Args:
            owner_id: Владелец
            published: Фильтр по флагу публикации (None — все)
            limit: Лимит записей (None — без лимита)
            offset: Смещение
        """
        pass

    @abstractmethod
    async def count_by_owner(self, owner_id: UUID, published: Optional[bool] = None) -> int:
        """Количество статей пользователя."""
        pass

    @abstractmethod
    async def find_published(self, limit: int = 20, offset: int = 0) -> List[ArticleWithAuthor]:
        """Опубликованные статьи всех авторов, новые первыми."""
        pass

    @abstractmethod
    async def find_published_by_tag(
        self,
        tag_id: UUID,
        limit: int = 20,
        offset: int = 0
    ) -> List[ArticleWithAuthor]:
        """Опубликованные статьи с данным тегом."""
        pass

    @abstractmethod
    async def count_published_by_tag(self, tag_id: UUID) -> int:
        pass

    @abstractmethod
    async def count(self, published: Optional[bool] = None) -> int:
        """Общее количество статей."""
        pass

    @abstractmethod
    async def delete(self, article_id: UUID) -> bool:
        """
        Удалить статью (теги и история удаляются каскадом).

        Returns:
            True если удалена
        """
        pass

    @abstractmethod
    async def get_status_history(self, article_id: UUID) -> List[ArticleStatusChange]:
        """Журнал переходов статуса, старые первыми."""
        pass
