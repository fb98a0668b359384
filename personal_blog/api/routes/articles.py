"""
FastAPI Routes для статей.

Чтение статьи доступно только владельцу: для всех остальных
(включая анонимов) ответ 404, как будто статьи нет.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from personal_blog.api.dependencies import (
    get_article_service,
    get_current_identity,
    get_optional_identity,
    get_search_service,
    get_tag_service,
)
from personal_blog.api.schemas.article_schemas import (
    ArticleDetailResponse,
    ArticleEnvelope,
    ArticleListResponse,
    ArticleMessageResponse,
    ArticleResponse,
    ChangeStatusRequest,
    CreateArticleRequest,
    MessageResponse,
    PaginationResponse,
    PublicArticleListResponse,
    SearchResponse,
    SearchResultResponse,
    SetTagsRequest,
    StatusChangeResponse,
    StatusHistoryResponse,
    TagResponse,
    TagsMessageResponse,
    TagsResponse,
    UpdateArticleRequest,
)
from personal_blog.application.commands.article_commands import (
    ChangeArticleStatusCommand,
    CreateArticleCommand,
    DeleteArticleCommand,
    UpdateArticleCommand,
)
from personal_blog.application.queries.get_article_query import (
    GetArticleQuery,
    ListArticlesQuery,
    SearchArticlesQuery,
)
from personal_blog.application.services.article_service import ArticleService
from personal_blog.application.services.search_service import SearchService
from personal_blog.application.services.tag_service import TagService
from personal_blog.domain.services.permission_gate import PermissionGate
from personal_blog.infrastructure.security.tokens import TokenPayload
from personal_blog.shared.exceptions.domain_exceptions import EntityNotFoundError

router = APIRouter(prefix="/articles", tags=["articles"])

ARTICLE_NOT_FOUND = "Article not found or access denied"


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    published: Optional[bool] = None,
    identity: TokenPayload = Depends(get_current_identity),
    service: ArticleService = Depends(get_article_service)
):
    """Статьи текущего пользователя."""
    articles = await service.get_user_articles(
        ListArticlesQuery(
            owner_id=identity.user_id,
            published=published,
            limit=limit,
            offset=(page - 1) * limit,
        )
    )
    total = await service.count_user_articles(identity.user_id, published)
    return ArticleListResponse(
        articles=[ArticleResponse.from_entity(a) for a in articles],
        pagination=PaginationResponse(page=page, limit=limit, total=total),
    )


@router.post("", response_model=ArticleMessageResponse, status_code=201)
async def create_article(
    request: CreateArticleRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: ArticleService = Depends(get_article_service)
):
    """Создать статью."""
    command = CreateArticleCommand(
        owner_id=identity.user_id,
        title=request.title,
        content=request.content,
        excerpt=request.excerpt,
        published=request.published,
        tags=request.tags,
    )

    article = await service.create_article(command)
    return ArticleMessageResponse(
        message="Article created",
        article=ArticleDetailResponse.from_entity(article),
    )


@router.get("/search", response_model=SearchResponse)
async def search_articles(
    q: Optional[str] = None,
    limit: int = 10,
    identity: TokenPayload = Depends(get_current_identity),
    service: SearchService = Depends(get_search_service)
):
    """Поиск по статьям текущего пользователя."""
    query = SearchArticlesQuery(query=q or "", limit=limit, owner_id=identity.user_id)
    results = await service.search_articles(query)
    return SearchResponse(
        query=query.query.strip(),
        results=[SearchResultResponse.from_entity(r) for r in results],
        total=len(results),
    )


@router.get("/public", response_model=PublicArticleListResponse)
async def list_published_articles(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    service: ArticleService = Depends(get_article_service)
):
    """Публичная лента опубликованных статей."""
    articles = await service.get_published_articles(limit=limit, offset=(page - 1) * limit)
    total = await service.get_articles_count(published=True)
    return PublicArticleListResponse(
        articles=[ArticleDetailResponse.from_entity(a) for a in articles],
        pagination=PaginationResponse(page=page, limit=limit, total=total),
    )


@router.get("/public/search", response_model=SearchResponse)
async def search_published_articles(
    q: Optional[str] = None,
    limit: int = 10,
    service: SearchService = Depends(get_search_service)
):
    """Поиск по опубликованным статьям всех авторов."""
    query = SearchArticlesQuery(query=q or "", limit=limit)
    results = await service.search_articles(query)
    return SearchResponse(
        query=query.query.strip(),
        results=[SearchResultResponse.from_entity(r) for r in results],
        total=len(results),
    )


@router.get("/{article_id}", response_model=ArticleEnvelope)
async def get_article(
    article_id: UUID,
    identity: Optional[TokenPayload] = Depends(get_optional_identity),
    service: ArticleService = Depends(get_article_service)
):
    """Получить статью по ID (только владельцу)."""
    article = await service.get_article_by_id_with_permission(
        GetArticleQuery(article_id=article_id, requester_id=identity.user_id if identity else None)
    )
    if article is None:
        raise EntityNotFoundError(ARTICLE_NOT_FOUND)
    return ArticleEnvelope(article=ArticleDetailResponse.from_entity(article))


@router.put("/{article_id}", response_model=ArticleMessageResponse)
async def update_article(
    article_id: UUID,
    request: UpdateArticleRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: ArticleService = Depends(get_article_service)
):
    """Частично обновить статью (включая published/status и теги)."""
    command = UpdateArticleCommand(
        article_id=article_id,
        requester_id=identity.user_id,
        patch=request.to_patch(),
        tags=request.tags,
    )
    article = await service.update_article(command)
    return ArticleMessageResponse(
        message="Article updated",
        article=ArticleDetailResponse.from_entity(article),
    )


@router.delete("/{article_id}", response_model=MessageResponse)
async def delete_article(
    article_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    service: ArticleService = Depends(get_article_service)
):
    """Удалить статью."""
    await service.delete_article(DeleteArticleCommand(article_id=article_id, requester_id=identity.user_id))
    return MessageResponse(message="Article deleted")


@router.post("/{article_id}/status", response_model=ArticleMessageResponse)
async def change_article_status(
    article_id: UUID,
    request: ChangeStatusRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: ArticleService = Depends(get_article_service)
):
    """Сменить статус статьи (draft / published / archived)."""
    article = await service.change_article_status(
        ChangeArticleStatusCommand(
            article_id=article_id,
            requester_id=identity.user_id,
            to_status=request.status,
            reason=request.reason,
        )
    )
    return ArticleMessageResponse(
        message="Article status changed",
        article=ArticleDetailResponse.from_entity(article),
    )


@router.get("/{article_id}/history", response_model=StatusHistoryResponse)
async def get_article_history(
    article_id: UUID,
    identity: TokenPayload = Depends(get_current_identity),
    service: ArticleService = Depends(get_article_service)
):
    """Журнал смены статусов статьи."""
    history = await service.get_status_history(article_id, identity.user_id)
    return StatusHistoryResponse(history=[StatusChangeResponse.from_entity(h) for h in history])


@router.get("/{article_id}/tags", response_model=TagsResponse)
async def get_article_tags(
    article_id: UUID,
    identity: Optional[TokenPayload] = Depends(get_optional_identity),
    service: ArticleService = Depends(get_article_service)
):
    """Теги статьи (то же правило видимости, что и для самой статьи)."""
    article = await service.get_article_by_id_with_permission(
        GetArticleQuery(article_id=article_id, requester_id=identity.user_id if identity else None)
    )
    if article is None:
        raise EntityNotFoundError(ARTICLE_NOT_FOUND)
    return TagsResponse(tags=[TagResponse.from_entity(t) for t in article.tags])


@router.post("/{article_id}/tags", response_model=TagsMessageResponse)
async def set_article_tags(
    article_id: UUID,
    request: SetTagsRequest,
    identity: TokenPayload = Depends(get_current_identity),
    service: ArticleService = Depends(get_article_service),
    tag_service: TagService = Depends(get_tag_service)
):
    """Заменить набор тегов статьи целиком."""
    article = await service.get_article_by_id(article_id)
    if article is None:
        raise EntityNotFoundError("Article not found")
    PermissionGate.ensure_can_write(article, identity.user_id)

    tags = await tag_service.set_article_tags_by_names(article_id, request.tags)
    return TagsMessageResponse(
        message="Tags updated",
        tags=[TagResponse.from_entity(t) for t in tags],
    )
