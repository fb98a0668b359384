"""
Value Object: ArticleStatus

Статус публикации статьи и правила переходов между статусами.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Protocol, Tuple


class ArticleLike(Protocol):
    """Минимальный набор полей статьи, нужный для проверки перехода."""

    title: str
    content: str


class ArticleStatus(str, Enum):
    """Статусы жизненного цикла статьи."""

    DRAFT = "draft"                  # Черновик
    PUBLISHED = "published"          # Опубликована
    ARCHIVED = "archived"            # Архивирована

    @classmethod
    def from_published(cls, published: bool) -> "ArticleStatus":
        """Преобразовать boolean флаг в статус (обратная совместимость)."""
        return cls.PUBLISHED if published else cls.DRAFT

    @property
    def is_published(self) -> bool:
        return self is ArticleStatus.PUBLISHED

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    def can_transition_to(self, new_status: "ArticleStatus") -> bool:
        """Проверка возможности перехода (без проверки предусловий)."""
        return (self, new_status) in STATUS_TRANSITIONS

    def validate_transition(
        self,
        new_status: "ArticleStatus",
        article: Optional[ArticleLike] = None
    ) -> Optional[str]:
        """Сокращение для :func:`validate_status_transition`."""
        return validate_status_transition(self, new_status, article)


_DISPLAY_NAMES = {
    ArticleStatus.DRAFT: "Draft",
    ArticleStatus.PUBLISHED: "Published",
    ArticleStatus.ARCHIVED: "Archived",
}


def _validate_publishable(article: ArticleLike) -> Optional[str]:
    if not article.title or not article.title.strip():
        return "Article title cannot be empty"
    if not article.content or not article.content.strip():
        return "Article content cannot be empty"
    if len(article.title) > 500:
        return "Article title too long (max 500 chars)"
    return None


@dataclass(frozen=True)
class StatusTransition:
    """Разрешённый переход с опциональным предусловием."""

    from_status: ArticleStatus
    to_status: ArticleStatus
    validation: Optional[Callable[[ArticleLike], Optional[str]]] = None


# Правила переходов:
# - DRAFT -> PUBLISHED (заголовок и контент не пустые), ARCHIVED
# - PUBLISHED -> DRAFT, ARCHIVED
# - ARCHIVED -> DRAFT (обратно в PUBLISHED только через черновик)
STATUS_TRANSITIONS: Dict[Tuple[ArticleStatus, ArticleStatus], StatusTransition] = {
    (t.from_status, t.to_status): t
    for t in (
        StatusTransition(ArticleStatus.DRAFT, ArticleStatus.PUBLISHED, _validate_publishable),
        StatusTransition(ArticleStatus.PUBLISHED, ArticleStatus.DRAFT),
        StatusTransition(ArticleStatus.PUBLISHED, ArticleStatus.ARCHIVED),
        StatusTransition(ArticleStatus.DRAFT, ArticleStatus.ARCHIVED),
        StatusTransition(ArticleStatus.ARCHIVED, ArticleStatus.DRAFT),
    )
}


def validate_status_transition(
    from_status: ArticleStatus,
    to_status: ArticleStatus,
    article: Optional[ArticleLike] = None
) -> Optional[str]:
    """
    Проверить переход статуса.

    Аргументы:
        from_status: Текущий статус
        to_status: Целевой статус
        article: Статья (в том виде, в котором она будет сохранена) для
            проверки предусловий перехода

    Возвращает:
        None если переход допустим, иначе человекочитаемую причину отказа
    """
    transition = STATUS_TRANSITIONS.get((from_status, to_status))
    if transition is None:
        return (
            f"Transition from {from_status.value} to {to_status.value} is not allowed"
        )

    if transition.validation is not None and article is not None:
        return transition.validation(article)

    return None


def can_publish(article: ArticleLike) -> Tuple[bool, Optional[str]]:
    """Можно ли опубликовать черновик. Возвращает (allowed, reason)."""
    reason = validate_status_transition(ArticleStatus.DRAFT, ArticleStatus.PUBLISHED, article)
    return reason is None, reason
