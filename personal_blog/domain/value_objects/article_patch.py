"""
Value Object: ArticlePatch

Частичное обновление статьи. Каждое поле либо UNSET (не трогать),
либо содержит новое значение (в т.ч. None для excerpt — очистить).
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

from personal_blog.domain.value_objects.article_status import ArticleStatus


class _Unset:
    """Маркер отсутствующего поля."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class ArticlePatch:
    """Набор изменений для статьи."""

    title: Union[str, _Unset] = UNSET
    content: Union[str, _Unset] = UNSET
    excerpt: Union[Optional[str], _Unset] = UNSET
    published: Union[bool, _Unset] = UNSET
    status: Union[ArticleStatus, _Unset] = UNSET

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArticlePatch":
        """Собрать patch из словаря (только известные ключи)."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        if "status" in values and values["status"] is not None:
            values["status"] = ArticleStatus(values["status"])
        return cls(**values)

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def changes(self) -> Dict[str, Any]:
        """Только заданные поля."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()

    def target_status(self, current: ArticleStatus) -> ArticleStatus:
        """
        Определить целевой статус.

        Явный ``status`` важнее ``published``. ``published=False`` снимает
        с публикации только опубликованную статью; архив остаётся архивом.
        """
        if self.is_set("status"):
            return self.status
        if self.is_set("published"):
            if self.published:
                return ArticleStatus.PUBLISHED
            return ArticleStatus.DRAFT if current is ArticleStatus.PUBLISHED else current
        return current
