"""
FastAPI Routes для тегов.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from personal_blog.api.dependencies import get_article_service, get_current_identity, get_tag_service
from personal_blog.api.schemas.article_schemas import (
    ArticleDetailResponse,
    CreateTagRequest,
    MessageResponse,
    PaginationResponse,
    PublicArticleListResponse,
    TagListResponse,
    TagMessageResponse,
    TagResponse,
    TagWithCountResponse,
)
from personal_blog.application.services.article_service import ArticleService
from personal_blog.application.services.tag_service import TagService
from personal_blog.infrastructure.security.tokens import TokenPayload
from personal_blog.shared.exceptions.domain_exceptions import EntityNotFoundError

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=TagListResponse)
async def list_tags(
    search: Optional[str] = None,
    include_count: bool = Query(False, alias="includeCount"),
    limit: int = Query(50, ge=1, le=100),
    service: TagService = Depends(get_tag_service)
):
    """
    Список тегов.

    ?search= ищет по подстроке имени, ?includeCount=true добавляет
    число опубликованных статей с тегом.
    """
    if search and search.strip():
        tags = [TagResponse.from_entity(t) for t in await service.search_tags(search, limit)]
    elif include_count:
        tags = [TagWithCountResponse.from_entity(t) for t in await service.get_tags_with_count()]
    else:
        tags = [TagResponse.from_entity(t) for t in await service.get_all_tags()]

    return TagListResponse(tags=tags, total=len(tags))


@router.post("", response_model=TagMessageResponse, status_code=201)
async def create_tag(
    request: CreateTagRequest,
    service: TagService = Depends(get_tag_service)
):
    """Создать тег (если такой уже есть, вернуть существующий)."""
    tag = await service.create_tag(request.name)
    return TagMessageResponse(message="Tag created", tag=TagResponse.from_entity(tag))


@router.delete("/{tag_id}", response_model=MessageResponse)
async def delete_tag(
    tag_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    service: TagService = Depends(get_tag_service)
):
    """Удалить неиспользуемый тег."""
    await service.delete_tag(tag_id)
    return MessageResponse(message="Tag deleted")


@router.get("/{tag_id}/articles", response_model=PublicArticleListResponse)
async def list_tag_articles(
    tag_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    service: TagService = Depends(get_tag_service),
    article_service: ArticleService = Depends(get_article_service)
):
    """Опубликованные статьи с тегом."""
    if await service.get_tag_by_id(tag_id) is None:
        raise EntityNotFoundError("Tag not found")

    articles = await article_service.get_articles_by_tag(tag_id, limit=limit, offset=(page - 1) * limit)
    total = await article_service.count_articles_by_tag(tag_id)
    return PublicArticleListResponse(
        articles=[ArticleDetailResponse.from_entity(a) for a in articles],
        pagination=PaginationResponse(page=page, limit=limit, total=total),
    )
