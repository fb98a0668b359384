"""
Pydantic schemas для API: статьи, теги, поиск.
"""

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from personal_blog.domain.entities.article import Article, ArticleWithAuthor, SearchResult
from personal_blog.domain.entities.status_change import ArticleStatusChange
from personal_blog.domain.entities.tag import Tag, TagWithCount
from personal_blog.domain.value_objects.article_patch import ArticlePatch
from personal_blog.domain.value_objects.article_status import ArticleStatus


# =============================================================================
# Requests
# =============================================================================

class CreateArticleRequest(BaseModel):
    """Запрос на создание статьи. Длины проверяет доменная сущность."""

    title: str = ""
    content: str = ""
    excerpt: Optional[str] = None
    published: bool = False
    tags: List[str] = []


class UpdateArticleRequest(BaseModel):
    """Частичное обновление: учитываются только переданные поля."""

    title: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    published: Optional[bool] = None
    status: Optional[ArticleStatus] = None
    tags: Optional[List[str]] = None

    def to_patch(self) -> ArticlePatch:
        """
        Собрать ArticlePatch из явно переданных полей.

        null допустим только для excerpt (очистить); для остальных полей
        null равносилен отсутствию поля.
        """
        values = self.model_dump(exclude_unset=True, exclude={"tags"})
        values = {
            name: value
            for name, value in values.items()
            if value is not None or name == "excerpt"
        }
        return ArticlePatch.from_dict(values)


class ChangeStatusRequest(BaseModel):
    status: ArticleStatus
    reason: Optional[str] = Field(default=None, max_length=1000)


class SetTagsRequest(BaseModel):
    tags: List[str] = []


class CreateTagRequest(BaseModel):
    name: str = ""


# =============================================================================
# Responses
# =============================================================================

class TagResponse(BaseModel):
    id: UUID
    name: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entity: Tag) -> "TagResponse":
        return cls(id=entity.id, name=entity.name, created_at=entity.created_at)


class TagWithCountResponse(TagResponse):
    article_count: int

    @classmethod
    def from_entity(cls, entity: TagWithCount) -> "TagWithCountResponse":
        return cls(
            id=entity.tag.id,
            name=entity.tag.name,
            created_at=entity.tag.created_at,
            article_count=entity.article_count,
        )


class ArticleResponse(BaseModel):
    """Ответ со статьёй."""

    id: UUID
    user_id: UUID
    title: str
    content: str
    excerpt: Optional[str]
    published: bool
    status: ArticleStatus
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, entity: Article) -> "ArticleResponse":
        """Создать из entity."""
        return cls(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            content=entity.content,
            excerpt=entity.excerpt,
            published=entity.published,
            status=entity.status,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class ArticleDetailResponse(ArticleResponse):
    """Статья с автором и тегами."""

    author_name: str
    author_email: str
    tags: List[TagResponse] = []

    @classmethod
    def from_entity(cls, entity: ArticleWithAuthor) -> "ArticleDetailResponse":
        base = ArticleResponse.from_entity(entity.article)
        return cls(
            **base.model_dump(),
            author_name=entity.author_name,
            author_email=entity.author_email,
            tags=[TagResponse.from_entity(t) for t in entity.tags],
        )


class SearchResultResponse(ArticleDetailResponse):
    rank: float
    highlight: Optional[str] = None

    @classmethod
    def from_entity(cls, entity: SearchResult) -> "SearchResultResponse":
        detail = ArticleDetailResponse.from_entity(entity.item)
        return cls(**detail.model_dump(), rank=entity.rank, highlight=entity.highlight)


class StatusChangeResponse(BaseModel):
    id: UUID
    article_id: UUID
    from_status: ArticleStatus
    to_status: ArticleStatus
    changed_by: UUID
    reason: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, entity: ArticleStatusChange) -> "StatusChangeResponse":
        return cls(
            id=entity.id,
            article_id=entity.article_id,
            from_status=entity.from_status,
            to_status=entity.to_status,
            changed_by=entity.changed_by,
            reason=entity.reason,
            created_at=entity.created_at,
        )


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int


class ArticleListResponse(BaseModel):
    articles: List[ArticleResponse]
    pagination: PaginationResponse


class PublicArticleListResponse(BaseModel):
    articles: List[ArticleDetailResponse]
    pagination: PaginationResponse


class ArticleEnvelope(BaseModel):
    article: ArticleDetailResponse


class ArticleMessageResponse(BaseModel):
    message: str
    article: ArticleDetailResponse


class MessageResponse(BaseModel):
    message: str


class SearchResponse(BaseModel):
    query: str
    results: List[SearchResultResponse]
    total: int


class TagsResponse(BaseModel):
    tags: List[TagResponse]


class TagsMessageResponse(BaseModel):
    message: str
    tags: List[TagResponse]


class TagListResponse(BaseModel):
    tags: List[Union[TagWithCountResponse, TagResponse]]
    total: int


class TagMessageResponse(BaseModel):
    message: str
    tag: TagResponse


class StatusHistoryResponse(BaseModel):
    history: List[StatusChangeResponse]
