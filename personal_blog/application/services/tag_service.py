"""
Application Service для тегов.
"""

import logging
from typing import List, Optional
from uuid import UUID

from personal_blog.domain.entities.tag import (
    Tag,
    TagWithCount,
    validate_tag_name,
    validate_tag_names,
)
from personal_blog.domain.repositories.tag_repository import ITagRepository
from personal_blog.shared.exceptions.domain_exceptions import ConflictError, EntityNotFoundError

logger = logging.getLogger(__name__)


class TagService:
    """Теги: get-or-create, замена набора тегов статьи, поиск и удаление."""

    def __init__(self, repository: ITagRepository):
        self.repository = repository

    async def create_tag(self, name: str) -> Tag:
        """
        Создать тег (или вернуть существующий).

        Raises:
            DomainValidationError: Пустое имя, длиннее 100 символов,
                недопустимые символы
        """
        return await self.repository.get_or_create(validate_tag_name(name, check_charset=True))

    async def set_article_tags_by_names(self, article_id: UUID, names: List[str]) -> List[Tag]:
        """
        Заменить набор тегов статьи (атомарно).

        Raises:
            DomainValidationError: Больше 10 тегов, пустое или длинное имя
        """
        return await self.repository.replace_article_tags(article_id, validate_tag_names(names))

    async def get_article_tags(self, article_id: UUID) -> List[Tag]:
        return await self.repository.find_by_article(article_id)

    async def get_tag_by_id(self, tag_id: UUID) -> Optional[Tag]:
        return await self.repository.find_by_id(tag_id)

    async def get_tag_by_name(self, name: str) -> Optional[Tag]:
        return await self.repository.find_by_name(name.strip())

    async def search_tags(self, query: str, limit: int = 10) -> List[Tag]:
        return await self.repository.search(query.strip(), limit)

    async def get_all_tags(self) -> List[Tag]:
        return await self.repository.find_all()

    async def get_tags_with_count(self) -> List[TagWithCount]:
        return await self.repository.find_with_count()

    async def delete_tag(self, tag_id: UUID) -> None:
        """
        Удалить тег, если он ни к одной статье не привязан.

        Raises:
            EntityNotFoundError: Тега нет
            ConflictError: Тег ещё используется
        """
        if await self.repository.find_by_id(tag_id) is None:
            raise EntityNotFoundError("Tag not found")
        if await self.repository.count_usages(tag_id) > 0:
            raise ConflictError("Cannot delete a tag that is still in use")
        await self.repository.delete(tag_id)
        logger.info(f"[Tags] Deleted {tag_id}")
