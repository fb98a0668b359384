"""
Хэширование паролей (bcrypt).
"""

from typing import Optional

import bcrypt


class PasswordHasher:
    """bcrypt с настраиваемой стоимостью (по умолчанию 12)."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._dummy_hash: Optional[str] = None

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            # Битый хэш в БД или пароль длиннее 72 байт
            return False

    def dummy_verify(self, password: str) -> None:
        """Проверка против фиктивного хэша той же стоимости, чтобы время ответа не выдавало, существует ли email."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("personal-blog-dummy")
        self.verify(password, self._dummy_hash)
