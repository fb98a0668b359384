"""
Repository реализация для пользователей.

Хэш пароля читается только в find_credentials.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from personal_blog.domain.entities.user import User, UserCredentials
from personal_blog.domain.repositories.user_repository import IUserRepository
from personal_blog.infrastructure.persistence.models import UserModel
from personal_blog.shared.exceptions.domain_exceptions import DuplicateEntityError


class UserRepositoryImpl(IUserRepository):
    """Адаптер хранилища пользователей."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User, password_hash: str) -> User:
        """Создать пользователя; гонка по email превращается в DuplicateEntityError."""
        model = UserModel(
            id=user.id,
            email=user.email,
            password_hash=password_hash,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(model)
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateEntityError("User already exists") from exc
        await self.session.refresh(model)
        return self._to_entity(model)

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    async def find_by_email(self, email: str) -> Optional[User]:
        model = await self._get_by_email(email)
        return self._to_entity(model) if model else None

    async def find_credentials(self, email: str) -> Optional[UserCredentials]:
        model = await self._get_by_email(email)
        if model is None:
            return None
        return UserCredentials(user=self._to_entity(model), password_hash=model.password_hash)

    async def exists_by_email(self, email: str) -> bool:
        result = await self.session.execute(
            select(func.count(UserModel.id)).where(UserModel.email == email)
        )
        return result.scalar() > 0

    async def _get_by_email(self, email: str) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            name=model.name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
