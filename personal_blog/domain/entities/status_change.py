"""
Доменная сущность: запись истории статусов (ArticleStatusChange)

Append-only журнал переходов статуса статьи.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from personal_blog.domain.value_objects.article_status import ArticleStatus


@dataclass(frozen=True)
class ArticleStatusChange:
    article_id: UUID
    from_status: ArticleStatus
    to_status: ArticleStatus
    changed_by: UUID
    reason: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
