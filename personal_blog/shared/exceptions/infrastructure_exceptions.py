"""
Infrastructure Exceptions

Исключения инфраструктурного слоя.
"""


class InfrastructureException(Exception):
    """Базовое исключение инфраструктуры."""

    kind = "internal"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class DatabaseError(InfrastructureException):
    """Ошибка работы с БД."""
    pass


class ConfigurationError(InfrastructureException):
    """Ошибка конфигурации (например, не задан SECRET_KEY)."""
    pass
