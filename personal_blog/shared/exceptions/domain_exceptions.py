"""
Domain Exceptions

Исключения доменного слоя.

Каждое исключение несёт стабильный ``kind`` — по нему API слой
выбирает HTTP статус, не заглядывая в текст сообщения.
"""


class DomainException(Exception):
    """Базовое исключение домена."""

    kind = "domain"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class DomainValidationError(DomainException):
    """Ошибка валидации входных данных или доменной сущности."""

    kind = "validation"


class InvalidStatusTransition(DomainValidationError):
    """Недопустимый переход статуса статьи."""

    kind = "invalid_transition"

    def __init__(self, message: str, from_status=None, to_status=None):
        super().__init__(message)
        self.from_status = from_status
        self.to_status = to_status


class EntityNotFoundError(DomainException):
    """Сущность не найдена (или скрыта от запрашивающего)."""

    kind = "not_found"


class DuplicateEntityError(DomainException):
    """Дубликат сущности (нарушение уникального ключа)."""

    kind = "conflict"


class ConflictError(DuplicateEntityError):
    """Операция конфликтует с текущим состоянием (например, тег ещё используется)."""


class PermissionDeniedError(DomainException):
    """Пользователь аутентифицирован, но не является владельцем."""

    kind = "forbidden"


class AuthenticationError(DomainException):
    """Нет токена или токен невалиден."""

    kind = "unauthenticated"
