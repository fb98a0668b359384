"""
Доменная сущность: Тег (Tag)

Теги общие для всех статей, создаются лениво (get-or-create).
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID, uuid4

from personal_blog.shared.exceptions.domain_exceptions import DomainValidationError

TAG_NAME_MAX_LENGTH = 100
MAX_TAGS_PER_ARTICLE = 10

# Буквы, цифры, CJK, пробел и дефис
TAG_NAME_PATTERN = re.compile(r"^[\w一-龥\s-]+$")


@dataclass
class Tag:
    name: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class TagWithCount:
    tag: Tag
    article_count: int


def validate_tag_name(name: Optional[str], check_charset: bool = False) -> str:
    """
    Проверить имя тега и вернуть его в нормализованном (trimmed) виде.

    Исключения:
        DomainValidationError: Пустое, слишком длинное или недопустимые символы
    """
    if not isinstance(name, str) or not name.strip():
        raise DomainValidationError("Tag name cannot be empty")
    if len(name) > TAG_NAME_MAX_LENGTH:
        raise DomainValidationError(f"Tag name too long (max {TAG_NAME_MAX_LENGTH} chars)")

    normalized = name.strip()
    if check_charset and not TAG_NAME_PATTERN.match(normalized):
        raise DomainValidationError(
            "Tag name may contain only letters, digits, CJK characters, spaces and hyphens"
        )
    return normalized


def validate_tag_names(names: Iterable[str]) -> List[str]:
    """
    Проверить набор тегов статьи (не больше 10, каждый 1-100 символов).

    Возвращает нормализованные имена без повторов, в исходном порядке.
    """
    names = list(names)
    if len(names) > MAX_TAGS_PER_ARTICLE:
        raise DomainValidationError(f"An article can have at most {MAX_TAGS_PER_ARTICLE} tags")
    return list(dict.fromkeys(validate_tag_name(name) for name in names))
