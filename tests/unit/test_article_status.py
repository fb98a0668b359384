"""
Unit tests для машины состояний статуса статьи.
"""

from types import SimpleNamespace

import pytest

from personal_blog.domain.value_objects.article_status import (
    STATUS_TRANSITIONS,
    ArticleStatus,
    can_publish,
    validate_status_transition,
)

DRAFT = ArticleStatus.DRAFT
PUBLISHED = ArticleStatus.PUBLISHED
ARCHIVED = ArticleStatus.ARCHIVED


def article(title="Title", content="Body"):
    return SimpleNamespace(title=title, content=content)


@pytest.mark.parametrize(
    "from_status,to_status",
    [
        (DRAFT, PUBLISHED),
        (PUBLISHED, DRAFT),
        (PUBLISHED, ARCHIVED),
        (DRAFT, ARCHIVED),
        (ARCHIVED, DRAFT),
    ],
)
def test_allowed_transitions(from_status, to_status):
    """Разрешённые переходы."""
    assert from_status.can_transition_to(to_status)
    assert validate_status_transition(from_status, to_status, article()) is None


def test_archived_cannot_be_published_directly():
    """Из архива опубликовать можно только через черновик."""
    assert not ARCHIVED.can_transition_to(PUBLISHED)
    assert (
        validate_status_transition(ARCHIVED, PUBLISHED)
        == "Transition from archived to published is not allowed"
    )


def test_transition_table_has_five_entries():
    assert len(STATUS_TRANSITIONS) == 5


def test_same_status_is_not_a_transition():
    for status in ArticleStatus:
        assert not status.can_transition_to(status)


def test_publish_requires_title():
    assert (
        validate_status_transition(DRAFT, PUBLISHED, article(title="  "))
        == "Article title cannot be empty"
    )


def test_publish_requires_content():
    assert (
        validate_status_transition(DRAFT, PUBLISHED, article(content=""))
        == "Article content cannot be empty"
    )


def test_publish_rejects_long_title():
    assert (
        validate_status_transition(DRAFT, PUBLISHED, article(title="t" * 501))
        == "Article title too long (max 500 chars)"
    )


def test_preconditions_only_on_publish():
    """Архивирование не проверяет заголовок и контент."""
    assert validate_status_transition(DRAFT, ARCHIVED, article(title="")) is None


def test_can_publish():
    assert can_publish(article()) == (True, None)
    assert can_publish(article(content="")) == (False, "Article content cannot be empty")


def test_status_helpers():
    assert ArticleStatus.from_published(True) is PUBLISHED
    assert ArticleStatus.from_published(False) is DRAFT
    assert PUBLISHED.is_published
    assert not ARCHIVED.is_published
    assert ARCHIVED.display_name == "Archived"
    assert DRAFT.validate_transition(PUBLISHED, article()) is None
