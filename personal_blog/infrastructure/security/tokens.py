"""
Bearer токены (itsdangerous).

Токен — подписанный сериализованный payload {userId, email, name}
с меткой времени; срок жизни проверяется через max_age при verify.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from itsdangerous import BadData, URLSafeTimedSerializer

from personal_blog.domain.entities.user import User
from personal_blog.shared.exceptions.infrastructure_exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TOKEN_SALT = "auth-token"
DEFAULT_MAX_AGE = 7 * 24 * 60 * 60


@dataclass(frozen=True)
class TokenPayload:
    user_id: UUID
    email: str
    name: str


class TokenService:
    """Выпуск и проверка токенов."""

    def __init__(self, secret_key: str, max_age_seconds: int = DEFAULT_MAX_AGE):
        if not secret_key:
            raise ConfigurationError("SECRET_KEY is not set")
        self.max_age_seconds = max_age_seconds
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)

    def generate_token(self, user: User) -> str:
        return self._serializer.dumps(
            {"userId": str(user.id), "email": user.email, "name": user.name}
        )

    def verify_token(self, token: Optional[str]) -> Optional[TokenPayload]:
        """
        Проверить токен.

        Возвращает:
            TokenPayload или None (подделан, истёк, битый) — причина
            наружу не отдаётся
        """
        if not token:
            return None
        try:
            data = self._serializer.loads(token, max_age=self.max_age_seconds)
            return TokenPayload(
                user_id=UUID(data["userId"]),
                email=data["email"],
                name=data["name"],
            )
        except BadData as exc:
            logger.debug(f"[Auth] Token rejected: {type(exc).__name__}")
        except (KeyError, TypeError, ValueError) as exc:
            logger.debug(f"[Auth] Token payload malformed: {type(exc).__name__}")
        return None
