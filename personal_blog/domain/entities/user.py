"""
Доменная сущность: Пользователь (User)

Хэш пароля в сущность не попадает — он живёт только в
UserCredentials и не покидает слой хранения/аутентификации.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from personal_blog.shared.exceptions.domain_exceptions import DomainValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # лимит bcrypt
NAME_MAX_LENGTH = 255


@dataclass
class User:
    email: str
    name: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True)
class UserCredentials:
    """Пользователь + хэш пароля. Только для проверки пароля."""

    user: User
    password_hash: str


def validate_registration(email: str, password: str, name: str) -> None:
    """
    Проверка данных регистрации.

    Исключения:
        DomainValidationError: Пустые поля, неверный email, короткий пароль
    """
    if not email or not password or not name or not name.strip():
        raise DomainValidationError("Email, password and name are required")
    if not EMAIL_PATTERN.match(email.strip()):
        raise DomainValidationError("Invalid email address")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise DomainValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise DomainValidationError(f"Password too long (max {PASSWORD_MAX_BYTES} bytes)")
    if len(name) > NAME_MAX_LENGTH:
        raise DomainValidationError(f"Name too long (max {NAME_MAX_LENGTH} chars)")
