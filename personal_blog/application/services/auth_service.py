"""
Application Service: регистрация, логин, пользователи.

bcrypt — CPU-bound, поэтому хэширование уходит в thread pool
(asyncio.to_thread), не блокируя event loop.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from personal_blog.domain.entities.user import User, validate_registration
from personal_blog.domain.repositories.user_repository import IUserRepository
from personal_blog.infrastructure.security.passwords import PasswordHasher
from personal_blog.infrastructure.security.tokens import TokenService
from personal_blog.shared.exceptions.domain_exceptions import (
    AuthenticationError,
    DomainValidationError,
    DuplicateEntityError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str


class AuthService:
    """Credential store + выпуск токенов."""

    def __init__(
        self,
        repository: IUserRepository,
        hasher: PasswordHasher,
        tokens: TokenService
    ):
        self.repository = repository
        self.hasher = hasher
        self.tokens = tokens

    async def create_user(self, email: str, password: str, name: str) -> User:
        """
        Зарегистрировать пользователя.

        Raises:
            DomainValidationError: Неверный email, короткий пароль, пустые поля
            DuplicateEntityError: Email уже зарегистрирован
        """
        validate_registration(email, password, name)
        email = email.strip()

        if await self.repository.exists_by_email(email):
            raise DuplicateEntityError("User already exists")

        password_hash = await asyncio.to_thread(self.hasher.hash, password)
        user = await self.repository.create(User(email=email, name=name.strip()), password_hash)
        logger.info(f"[Auth] Registered user {user.id}")
        return user

    async def validate_user(self, email: str, password: str) -> Optional[User]:
        """
        Проверить email + пароль.

        Возвращает None и для неизвестного email, и для неверного пароля —
        результат и время ответа в обоих случаях одинаковые.
        """
        credentials = await self.repository.find_credentials((email or "").strip())
        if credentials is None:
            await asyncio.to_thread(self.hasher.dummy_verify, password or "")
            return None

        if not await asyncio.to_thread(self.hasher.verify, password or "", credentials.password_hash):
            return None
        return credentials.user

    async def register(self, email: str, password: str, name: str) -> AuthResult:
        user = await self.create_user(email, password, name)
        return AuthResult(user=user, token=self.tokens.generate_token(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Raises:
            DomainValidationError: Не указан email или пароль
            AuthenticationError: Неверная пара email/пароль
        """
        if not email or not password:
            raise DomainValidationError("Email and password are required")

        user = await self.validate_user(email, password)
        if user is None:
            raise AuthenticationError("Invalid email or password")

        logger.info(f"[Auth] Login successful for user {user.id}")
        return AuthResult(user=user, token=self.tokens.generate_token(user))

    async def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        return await self.repository.find_by_id(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.repository.find_by_email(email.strip())
