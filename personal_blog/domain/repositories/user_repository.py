"""
Repository Interface: IUserRepository

Порт для хранилища пользователей.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from personal_blog.domain.entities.user import User, UserCredentials


class IUserRepository(ABC):
    """Интерфейс репозитория пользователей."""

    @abstractmethod
    async def create(self, user: User, password_hash: str) -> User:
        """
        Создать пользователя.

        Raises:
            DuplicateEntityError: Email уже зарегистрирован
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def find_credentials(self, email: str) -> Optional[UserCredentials]:
        """Пользователь вместе с хэшем пароля (только для логина)."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass
