"""
Тесты application слоя: команды над статьями, статусы, журнал, теги.
"""

from uuid import uuid4

import pytest

from personal_blog.application.commands.article_commands import (
    ChangeArticleStatusCommand,
    CreateArticleCommand,
    DeleteArticleCommand,
    UpdateArticleCommand,
)
from personal_blog.application.handlers.article_command_handler import ArticleCommandHandler
from personal_blog.application.queries.get_article_query import GetArticleQuery, ListArticlesQuery
from personal_blog.application.services.article_service import ArticleService
from personal_blog.application.services.auth_service import AuthService
from personal_blog.application.services.tag_service import TagService
from personal_blog.domain.value_objects.article_patch import ArticlePatch
from personal_blog.domain.value_objects.article_status import ArticleStatus
from personal_blog.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
from personal_blog.infrastructure.persistence.tag_repository_impl import TagRepositoryImpl
from personal_blog.infrastructure.persistence.user_repository_impl import UserRepositoryImpl
from personal_blog.infrastructure.security.passwords import PasswordHasher
from personal_blog.infrastructure.security.tokens import TokenService
from personal_blog.shared.exceptions.domain_exceptions import (
    AuthenticationError,
    ConflictError,
    DomainValidationError,
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidStatusTransition,
    PermissionDeniedError,
)


@pytest.fixture
def service(session):
    repository = ArticleRepositoryImpl(session)
    tag_repository = TagRepositoryImpl(session)
    return ArticleService(repository, tag_repository, ArticleCommandHandler(repository, tag_repository))


@pytest.fixture
def tag_service(session):
    return TagService(TagRepositoryImpl(session))


@pytest.fixture
def auth_service(session):
    return AuthService(UserRepositoryImpl(session), PasswordHasher(rounds=4), TokenService("svc-secret"))


@pytest.fixture
async def owner(make_user):
    return await make_user()


@pytest.fixture
async def stranger(make_user):
    return await make_user(email="bob@example.com", name="Bob")


async def create(service, owner, **kwargs):
    values = dict(owner_id=owner.id, title="Title", content="Body")
    values.update(kwargs)
    return await service.create_article(CreateArticleCommand(**values))


# =============================================================================
# Create / read
# =============================================================================

@pytest.mark.asyncio
async def test_create_returns_details(service, owner):
    article = await create(service, owner, excerpt="Short", tags=["python", "web"])

    assert article.article.status is ArticleStatus.DRAFT
    assert article.author_name == "Ann"
    assert [t.name for t in article.tags] == ["python", "web"]


@pytest.mark.asyncio
async def test_create_published(service, owner):
    article = await create(service, owner, published=True)
    assert article.article.status is ArticleStatus.PUBLISHED


@pytest.mark.asyncio
async def test_create_rejects_too_many_tags_before_writing(service, owner):
    with pytest.raises(DomainValidationError):
        await create(service, owner, tags=[f"t{i}" for i in range(11)])

    assert await service.count_user_articles(owner.id) == 0


@pytest.mark.asyncio
async def test_read_is_owner_only(service, owner, stranger):
    article = await create(service, owner, published=True)

    assert await service.get_article_by_id_with_permission(
        GetArticleQuery(article_id=article.id, requester_id=owner.id)
    ) is not None
    assert await service.get_article_by_id_with_permission(
        GetArticleQuery(article_id=article.id, requester_id=stranger.id)
    ) is None
    assert await service.get_article_by_id_with_permission(
        GetArticleQuery(article_id=article.id)
    ) is None


@pytest.mark.asyncio
async def test_list_user_articles(service, owner, stranger):
    await create(service, owner, title="A")
    await create(service, owner, title="B", published=True)
    await create(service, stranger, title="C")

    mine = await service.get_user_articles(ListArticlesQuery(owner_id=owner.id))
    published = await service.get_user_articles(ListArticlesQuery(owner_id=owner.id, published=True))

    assert {a.title for a in mine} == {"A", "B"}
    assert [a.title for a in published] == ["B"]


# =============================================================================
# Update / status
# =============================================================================

@pytest.mark.asyncio
async def test_update_by_stranger_forbidden(service, owner, stranger):
    article = await create(service, owner)

    with pytest.raises(PermissionDeniedError):
        await service.update_article(
            UpdateArticleCommand(article.id, stranger.id, ArticlePatch(title="Hacked"))
        )


@pytest.mark.asyncio
async def test_update_missing_article(service, owner):
    with pytest.raises(EntityNotFoundError):
        await service.update_article(UpdateArticleCommand(uuid4(), owner.id, ArticlePatch(title="X")))


@pytest.mark.asyncio
async def test_empty_update_rejected(service, owner):
    article = await create(service, owner)

    with pytest.raises(DomainValidationError, match="No fields to update"):
        await service.update_article(UpdateArticleCommand(article.id, owner.id, ArticlePatch()))


@pytest.mark.asyncio
async def test_publish_via_patch_records_history(service, owner):
    article = await create(service, owner)

    updated = await service.update_article(
        UpdateArticleCommand(article.id, owner.id, ArticlePatch(published=True))
    )
    history = await service.get_status_history(article.id, owner.id)

    assert updated.article.status is ArticleStatus.PUBLISHED
    assert updated.article.published is True
    assert [(h.from_status, h.to_status) for h in history] == [
        (ArticleStatus.DRAFT, ArticleStatus.PUBLISHED)
    ]
    assert history[0].changed_by == owner.id


@pytest.mark.asyncio
async def test_field_only_update_writes_no_history(service, owner):
    article = await create(service, owner)

    await service.update_article(UpdateArticleCommand(article.id, owner.id, ArticlePatch(title="New")))

    assert await service.get_status_history(article.id, owner.id) == []


@pytest.mark.asyncio
async def test_archived_to_published_rejected(service, owner):
    article = await create(service, owner)
    await service.change_article_status(
        ChangeArticleStatusCommand(article.id, owner.id, ArticleStatus.ARCHIVED, reason="stale")
    )

    with pytest.raises(InvalidStatusTransition):
        await service.update_article(
            UpdateArticleCommand(article.id, owner.id, ArticlePatch(status=ArticleStatus.PUBLISHED))
        )

    history = await service.get_status_history(article.id, owner.id)
    assert len(history) == 1
    assert history[0].reason == "stale"


@pytest.mark.asyncio
async def test_invalid_patch_leaves_article_untouched(service, owner):
    """Ошибка валидации одного поля отменяет весь patch."""
    article = await create(service, owner)

    with pytest.raises(DomainValidationError):
        await service.update_article(
            UpdateArticleCommand(article.id, owner.id, ArticlePatch(title="Fine", content=""))
        )

    stored = await service.get_article_by_id(article.id)
    assert stored.article.title == "Title"


@pytest.mark.asyncio
async def test_change_to_same_status_is_noop(service, owner):
    article = await create(service, owner)

    await service.change_article_status(
        ChangeArticleStatusCommand(article.id, owner.id, ArticleStatus.DRAFT)
    )

    assert await service.get_status_history(article.id, owner.id) == []


@pytest.mark.asyncio
async def test_tags_only_update(service, owner):
    article = await create(service, owner, tags=["old"])

    updated = await service.update_article(
        UpdateArticleCommand(article.id, owner.id, ArticlePatch(), tags=["new", "newer"])
    )

    assert [t.name for t in updated.tags] == ["new", "newer"]
    assert updated.article.title == "Title"


@pytest.mark.asyncio
async def test_history_hidden_from_stranger(service, owner, stranger):
    article = await create(service, owner)

    with pytest.raises(EntityNotFoundError):
        await service.get_status_history(article.id, stranger.id)


# =============================================================================
# Delete
# =============================================================================

@pytest.mark.asyncio
async def test_delete(service, owner, stranger):
    article = await create(service, owner)

    with pytest.raises(PermissionDeniedError):
        await service.delete_article(DeleteArticleCommand(article.id, stranger.id))

    await service.delete_article(DeleteArticleCommand(article.id, owner.id))
    assert await service.get_article_by_id(article.id) is None

    with pytest.raises(EntityNotFoundError):
        await service.delete_article(DeleteArticleCommand(article.id, owner.id))


# =============================================================================
# Tags
# =============================================================================

@pytest.mark.asyncio
async def test_tag_service(service, tag_service, owner):
    article = await create(service, owner, published=True)

    created = await tag_service.create_tag("  python  ")
    again = await tag_service.create_tag("python")
    tags = await tag_service.set_article_tags_by_names(article.id, ["python", "web"])

    assert created.id == again.id
    assert [t.name for t in tags] == ["python", "web"]
    assert [t.name for t in await tag_service.get_article_tags(article.id)] == ["python", "web"]
    assert (await tag_service.get_tag_by_name(" web ")).name == "web"
    assert [t.name for t in await tag_service.search_tags("PY")] == ["python"]
    by_tag = await service.get_articles_by_tag(created.id)
    assert [a.id for a in by_tag] == [article.id]


@pytest.mark.asyncio
async def test_delete_tag_in_use(service, tag_service, owner):
    article = await create(service, owner, tags=["python"])
    tag = await tag_service.get_tag_by_name("python")

    with pytest.raises(ConflictError):
        await tag_service.delete_tag(tag.id)

    await tag_service.set_article_tags_by_names(article.id, [])
    await tag_service.delete_tag(tag.id)
    assert await tag_service.get_tag_by_id(tag.id) is None

    with pytest.raises(EntityNotFoundError):
        await tag_service.delete_tag(tag.id)


# =============================================================================
# Auth
# =============================================================================

@pytest.mark.asyncio
async def test_register_and_login(auth_service):
    registered = await auth_service.register(" carol@example.com ", "secret1", " Carol ")
    logged_in = await auth_service.login("carol@example.com", "secret1")

    assert registered.user.email == "carol@example.com"
    assert registered.user.name == "Carol"
    assert logged_in.user.id == registered.user.id
    assert auth_service.tokens.verify_token(logged_in.token).user_id == registered.user.id


@pytest.mark.asyncio
async def test_register_duplicate(auth_service):
    await auth_service.register("carol@example.com", "secret1", "Carol")

    with pytest.raises(DuplicateEntityError):
        await auth_service.register("carol@example.com", "secret2", "Carol 2")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password,name",
    [
        ("", "secret1", "Carol"),
        ("carol@example.com", "short", "Carol"),
        ("not-an-email", "secret1", "Carol"),
        ("carol@example.com", "secret1", "   "),
    ],
)
async def test_register_validation(auth_service, email, password, name):
    with pytest.raises(DomainValidationError):
        await auth_service.register(email, password, name)


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(auth_service):
    await auth_service.register("carol@example.com", "secret1", "Carol")

    with pytest.raises(AuthenticationError) as wrong_password:
        await auth_service.login("carol@example.com", "wrong-password")
    with pytest.raises(AuthenticationError) as unknown_email:
        await auth_service.login("nobody@example.com", "secret1")

    assert wrong_password.value.message == unknown_email.value.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_requires_fields(auth_service):
    with pytest.raises(DomainValidationError):
        await auth_service.login("", "secret1")
