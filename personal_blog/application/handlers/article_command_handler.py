"""
Command Handler для статей.

Здесь сходятся проверка владельца (PermissionGate), валидация
полей и машина состояний статуса. Любая ошибка валидации
срабатывает до записи — частичных обновлений нет. Репозитории статей
и тегов работают в одной сессии, так что правка полей вместе с тегами
фиксируется одним commit.
"""

import logging
from typing import Optional

from personal_blog.application.commands.article_commands import (
    ChangeArticleStatusCommand,
    CreateArticleCommand,
    DeleteArticleCommand,
    UpdateArticleCommand,
)
from personal_blog.domain.entities.article import Article
from personal_blog.domain.entities.status_change import ArticleStatusChange
from personal_blog.domain.entities.tag import validate_tag_names
from personal_blog.domain.repositories.article_repository import IArticleRepository
from personal_blog.domain.repositories.tag_repository import ITagRepository
from personal_blog.domain.services.permission_gate import PermissionGate
from personal_blog.domain.value_objects.article_patch import ArticlePatch
from personal_blog.domain.value_objects.article_status import (
    ArticleStatus,
    validate_status_transition,
)
from personal_blog.shared.exceptions.domain_exceptions import (
    DomainValidationError,
    EntityNotFoundError,
    InvalidStatusTransition,
)

logger = logging.getLogger(__name__)


class ArticleCommandHandler:
    """Handler для команд работы со статьями."""

    def __init__(self, repository: IArticleRepository, tag_repository: ITagRepository):
        self.repository = repository
        self.tag_repository = tag_repository

    async def handle_create_article(self, command: CreateArticleCommand) -> Article:
        """
        Обработка команды создания статьи.

        Args:
            command: Команда создания

        Returns:
            Созданная статья

        Raises:
            DomainValidationError: Пустой/длинный заголовок, пустой контент,
                длинный excerpt, неверный набор тегов
        """
        article = Article(
            user_id=command.owner_id,
            title=command.title,
            content=command.content,
            excerpt=command.excerpt,
            status=ArticleStatus.from_published(command.published),
        )
        tag_names = validate_tag_names(command.tags)

        saved = await self.repository.save(article)
        if tag_names:
            await self.tag_repository.replace_article_tags(saved.id, tag_names)

        logger.info(f"[Articles] Created {saved.id} (status={saved.status.value})")
        return saved

    async def handle_update_article(self, command: UpdateArticleCommand) -> Article:
        """
        Частичное обновление статьи.

        Raises:
            EntityNotFoundError: Статьи нет
            PermissionDeniedError: Запрашивающий не владелец
            DomainValidationError: Невалидные поля или пустой patch
            InvalidStatusTransition: Переход статуса запрещён
        """
        article = await self._load_for_write(command.article_id, command.requester_id)
        patch = command.patch

        if patch.is_empty() and command.tags is None:
            raise DomainValidationError("No fields to update")

        patched = article.apply_patch(patch)
        tag_names = validate_tag_names(command.tags) if command.tags is not None else None

        new_status, status_change = self._plan_transition(
            article, patched, patch.target_status(article.status), command.requester_id
        )

        if patch.is_empty():
            await self.tag_repository.replace_article_tags(article.id, tag_names)
            return article

        # теги и поля статьи фиксируются одним commit в update()
        if tag_names is not None:
            await self.tag_repository.stage_article_tags(article.id, tag_names)
        updated = await self.repository.update(
            article.id, patch, new_status=new_status, status_change=status_change
        )

        if status_change is not None:
            logger.info(
                f"[Articles] {article.id}: {status_change.from_status.value} -> "
                f"{status_change.to_status.value}"
            )
        return updated

    async def handle_change_status(self, command: ChangeArticleStatusCommand) -> Article:
        """Явная смена статуса (с причиной в журнале)."""
        article = await self._load_for_write(command.article_id, command.requester_id)

        new_status, status_change = self._plan_transition(
            article, article, command.to_status, command.requester_id, command.reason
        )
        if new_status is None:
            return article

        updated = await self.repository.update(
            article.id, ArticlePatch(), new_status=new_status, status_change=status_change
        )
        logger.info(f"[Articles] {article.id}: {article.status.value} -> {new_status.value}")
        return updated

    async def handle_delete_article(self, command: DeleteArticleCommand) -> None:
        article = await self._load_for_write(command.article_id, command.requester_id)
        await self.repository.delete(article.id)
        logger.info(f"[Articles] Deleted {article.id}")

    async def _load_for_write(self, article_id, requester_id) -> Article:
        article = await self.repository.find_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article not found")
        PermissionGate.ensure_can_write(article, requester_id)
        return article

    @staticmethod
    def _plan_transition(
        current: Article,
        patched: Article,
        target: ArticleStatus,
        requester_id,
        reason: Optional[str] = None
    ):
        """
        Проверить переход статуса.

        Returns:
            (new_status, status_change) или (None, None), если статус не меняется
        """
        if target is current.status:
            return None, None

        error = validate_status_transition(current.status, target, patched)
        if error is not None:
            raise InvalidStatusTransition(error, current.status, target)

        return target, ArticleStatusChange(
            article_id=current.id,
            from_status=current.status,
            to_status=target,
            changed_by=requester_id,
            reason=reason,
        )
