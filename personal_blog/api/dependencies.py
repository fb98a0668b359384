"""
FastAPI Dependencies для DI.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from personal_blog.application.handlers.article_command_handler import ArticleCommandHandler
from personal_blog.application.services.article_service import ArticleService
from personal_blog.application.services.auth_service import AuthService
from personal_blog.application.services.search_service import SearchService
from personal_blog.application.services.tag_service import TagService
from personal_blog.infrastructure.config.database import get_db_session
from personal_blog.infrastructure.config.settings import get_settings
from personal_blog.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
from personal_blog.infrastructure.persistence.article_search_impl import ArticleSearchImpl
from personal_blog.infrastructure.persistence.tag_repository_impl import TagRepositoryImpl
from personal_blog.infrastructure.persistence.user_repository_impl import UserRepositoryImpl
from personal_blog.infrastructure.security.passwords import PasswordHasher
from personal_blog.infrastructure.security.tokens import TokenPayload, TokenService
from personal_blog.shared.exceptions.domain_exceptions import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(settings.secret_key, settings.token_max_age_seconds)


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(get_settings().bcrypt_rounds)


async def get_article_repository(
    session: AsyncSession = Depends(get_db_session)
) -> ArticleRepositoryImpl:
    """DI для repository."""
    return ArticleRepositoryImpl(session)


async def get_tag_repository(
    session: AsyncSession = Depends(get_db_session)
) -> TagRepositoryImpl:
    return TagRepositoryImpl(session)


async def get_article_service(
    repository: ArticleRepositoryImpl = Depends(get_article_repository),
    tag_repository: TagRepositoryImpl = Depends(get_tag_repository)
) -> ArticleService:
    """DI для service."""
    command_handler = ArticleCommandHandler(repository, tag_repository)
    return ArticleService(repository, tag_repository, command_handler)


async def get_tag_service(
    tag_repository: TagRepositoryImpl = Depends(get_tag_repository)
) -> TagService:
    return TagService(tag_repository)


async def get_search_service(
    session: AsyncSession = Depends(get_db_session)
) -> SearchService:
    return SearchService(ArticleSearchImpl(session), TagRepositoryImpl(session))


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service)
) -> AuthService:
    return AuthService(UserRepositoryImpl(session), hasher, tokens)


async def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service)
) -> Optional[TokenPayload]:
    """Identity из Bearer токена или None (нет токена / невалидный)."""
    if credentials is None:
        return None
    return tokens.verify_token(credentials.credentials)


async def get_current_identity(
    identity: Optional[TokenPayload] = Depends(get_optional_identity)
) -> TokenPayload:
    """
    Обязательная аутентификация.

    Raises:
        AuthenticationError: Нет токена или токен невалиден
    """
    if identity is None:
        raise AuthenticationError("Authentication required")
    return identity
