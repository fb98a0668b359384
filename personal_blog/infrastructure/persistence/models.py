# -*- coding: utf-8 -*-
"""
SQLAlchemy модели — инфраструктурный слой.

Таблицы: users, articles, tags, article_tags, article_status_history.
Все ключи UUID. Колонка articles.search_vector (tsvector) в модели
не объявлена — её создаёт миграция только для PostgreSQL
(см. persistence/migrations.py).
"""

from datetime import datetime
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import declarative_base
import uuid

Base = declarative_base()


article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", Uuid, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class UserModel(Base):
    """SQLAlchemy модель пользователя."""

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<UserModel(id={self.id}, email='{self.email}')>"


class ArticleModel(Base):
    """
    SQLAlchemy модель статьи.

    published и status меняются только вместе (см. ArticleRepositoryImpl).
    """

    __tablename__ = "articles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(1000))
    published = Column(Boolean, default=False, nullable=False, index=True)
    status = Column(
        String(20),
        default="draft",
        nullable=False,
        comment="draft / published / archived"
    )
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("articles_created_at_idx", "created_at"),
    )

    def __repr__(self):
        return f"<ArticleModel(id={self.id}, title='{self.title[:50]}...')>"


class TagModel(Base):
    """SQLAlchemy модель тега."""

    __tablename__ = "tags"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)

    def __repr__(self):
        return f"<TagModel(id={self.id}, name='{self.name}')>"


class ArticleStatusHistoryModel(Base):
    """Журнал переходов статуса (append-only)."""

    __tablename__ = "article_status_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    article_id = Column(
        Uuid,
        ForeignKey("articles.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    from_status = Column(String(20), nullable=False)
    to_status = Column(String(20), nullable=False)
    changed_by = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    reason = Column(Text)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)

    def __repr__(self):
        return (
            f"<ArticleStatusHistoryModel(article_id={self.article_id}, "
            f"{self.from_status}->{self.to_status})>"
        )
