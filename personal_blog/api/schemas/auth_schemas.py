"""
Pydantic schemas для аутентификации.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from personal_blog.domain.entities.user import User


class RegisterRequest(BaseModel):
    """Регистрация. Формат email и длину пароля проверяет домен."""

    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    """Пользователь без хэша пароля."""

    id: UUID
    email: str
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entity: User) -> "UserResponse":
        return cls(
            id=entity.id,
            email=entity.email,
            name=entity.name,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse
