"""
Unit tests для PermissionGate.
"""

from uuid import uuid4

import pytest

from personal_blog.domain.entities.article import Article, ArticleWithAuthor
from personal_blog.domain.services.permission_gate import PermissionGate
from personal_blog.domain.value_objects.article_status import ArticleStatus
from personal_blog.shared.exceptions.domain_exceptions import PermissionDeniedError


@pytest.fixture
def owner_id():
    return uuid4()


@pytest.fixture
def article(owner_id):
    return Article(user_id=owner_id, title="Title", content="Body")


def test_owner_can_read_and_write(article, owner_id):
    assert PermissionGate.can_read(article, owner_id)
    assert PermissionGate.can_write(article, owner_id)


def test_anonymous_cannot_read(article):
    assert not PermissionGate.can_read(article, None)
    assert not PermissionGate.can_write(article, None)


@pytest.mark.parametrize("status", list(ArticleStatus))
def test_other_user_cannot_read_any_status(owner_id, status):
    """Видимость не зависит от статуса публикации."""
    article = Article(user_id=owner_id, title="Title", content="Body", status=status)
    assert not PermissionGate.can_read(article, uuid4())


def test_filter_visible(article, owner_id):
    assert PermissionGate.filter_visible(article, owner_id) is article
    assert PermissionGate.filter_visible(article, uuid4()) is None
    assert PermissionGate.filter_visible(None, owner_id) is None


def test_filter_visible_read_model(article, owner_id):
    item = ArticleWithAuthor(article=article, author_name="Ann", author_email="ann@example.com")
    assert PermissionGate.filter_visible(item, owner_id) is item
    assert PermissionGate.filter_visible(item, None) is None


def test_ensure_can_write(article, owner_id):
    PermissionGate.ensure_can_write(article, owner_id)

    with pytest.raises(PermissionDeniedError):
        PermissionGate.ensure_can_write(article, uuid4())
